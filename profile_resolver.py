"""Profile resolution: pick a concrete profile and asset for an input source

The repository is either a local directory or an http(s) base URL holding a
`profilesList.json` index plus one document per profile:

  profilesList.json  {"generic-trigger": {"path": "generic-trigger/profile.json", "deprecated": false}, ...}

Local files are parsed with yaml.safe_load (JSON is valid YAML); remote ones
are fetched with httpx. Nothing here retries: NetworkError and NotFoundError
surface straight to the caller.
"""
import asyncio
import logging
import os
import posixpath
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import httpx
import yaml

from core.config import DEFAULT_CONFIG, MotionConfig
from core.errors import NetworkError, NotFoundError, ValidationError
from core.profile import Profile
from core.state import Handedness

LOG = logging.getLogger("motionbridge.resolver")

PROFILES_LIST_NAME = "profilesList.json"


@dataclass(frozen=True)
class ProfileEntry:
    profile_id: str
    path: str
    deprecated: bool = False


@dataclass(frozen=True)
class ResolvedProfile:
    profile: Profile
    asset_path: Optional[str]
    profile_path: str
    deprecated: bool = False


def available_handedness(profile: Profile) -> List[Handedness]:
    return profile.handedness_values


class ProfileResolver:
    """Resolve candidate profile ids against a profile repository.

    Args:
        base_path: local directory or http(s) URL of the repository
        default_profile_id: id used when no candidate is in the index
        transport: optional httpx transport (tests use httpx.MockTransport)
        timeout: per-request timeout in seconds for remote repositories
    """

    def __init__(self, base_path: str, default_profile_id: str = DEFAULT_CONFIG.default_profile_id,
                 transport: httpx.AsyncBaseTransport = None, timeout: float = DEFAULT_CONFIG.timeout):
        self.base_path = base_path
        self.default_profile_id = default_profile_id
        self._transport = transport
        self._timeout = timeout
        self._client = None

    @classmethod
    def from_config(cls, config: MotionConfig, **kwargs) -> "ProfileResolver":
        return cls(config.profiles_base, default_profile_id=config.default_profile_id,
                   timeout=config.timeout, **kwargs)

    @property
    def is_remote(self) -> bool:
        return self.base_path.startswith(("http://", "https://"))

    async def aclose(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ProfileResolver":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def join(self, *parts: str) -> str:
        """Join repository-relative parts onto the base location."""
        parts = [p.strip("/") for p in parts if p]
        if self.is_remote:
            return "/".join([self.base_path.rstrip("/")] + parts)
        return os.path.join(self.base_path, *parts)

    async def _fetch_remote(self, url: str):
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        try:
            resp = await self._client.get(url)
        except httpx.TransportError as e:
            raise NetworkError(f"failed to fetch {url}: {e}", url=url) from e
        if resp.status_code == 404:
            raise NotFoundError(f"{url} not found")
        if not resp.is_success:
            raise NetworkError(f"fetching {url} returned HTTP {resp.status_code}",
                               url=url, status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise ValidationError(f"{url} is not valid JSON: {e}") from e

    @staticmethod
    def _read_local(path: str):
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except FileNotFoundError as e:
            raise NotFoundError(f"{path} not found") from e
        except OSError as e:
            raise NetworkError(f"failed to read {path}: {e}", url=path) from e
        except yaml.YAMLError as e:
            raise ValidationError(f"{path} could not be parsed: {e}") from e

    async def fetch_json(self, relative_path: str):
        location = self.join(relative_path)
        LOG.debug("fetching %s", location)
        if self.is_remote:
            return await self._fetch_remote(location)
        return await asyncio.to_thread(self._read_local, location)

    async def fetch_profiles_list(self) -> Dict[str, ProfileEntry]:
        raw = await self.fetch_json(PROFILES_LIST_NAME)
        if not isinstance(raw, dict):
            raise ValidationError(f"{PROFILES_LIST_NAME} must map profile ids to paths")
        entries = {}
        for profile_id, value in raw.items():
            if isinstance(value, str):
                entries[profile_id] = ProfileEntry(profile_id, value)
            elif isinstance(value, dict) and value.get("path"):
                entries[profile_id] = ProfileEntry(profile_id, value["path"], bool(value.get("deprecated", False)))
            else:
                raise ValidationError(f"{PROFILES_LIST_NAME}: entry {profile_id!r} has no path")
        LOG.debug("profiles list has %d entries", len(entries))
        return entries

    def select_entry(self, candidates: Sequence[str], profiles_list: Dict[str, ProfileEntry]) -> ProfileEntry:
        """First candidate present in the index, else the repository default."""
        for profile_id in candidates:
            entry = profiles_list.get(profile_id)
            if entry is not None:
                if entry.deprecated:
                    LOG.warning("profile %s is deprecated", profile_id)
                return entry
        entry = profiles_list.get(self.default_profile_id)
        if entry is None:
            raise NotFoundError(
                f"no profile in {list(candidates)} or default {self.default_profile_id!r} is in the repository"
            )
        LOG.info("no candidate in %s found, falling back to %s", list(candidates), self.default_profile_id)
        return entry

    def asset_path_for(self, profile: Profile, entry: ProfileEntry, handedness: Handedness) -> str:
        layout = profile.layout_for(handedness)
        if layout is None:
            raise NotFoundError(f"profile {profile.profile_id} has no layout for handedness {handedness.value}")
        asset = profile.asset_for(handedness)
        if asset:
            return self.join(asset)
        if layout.asset_path:
            return self.join(posixpath.dirname(entry.path), layout.asset_path)
        raise NotFoundError(f"profile {profile.profile_id} declares no asset for handedness {handedness.value}")

    async def resolve(self, candidates: Sequence[str], handedness: Handedness = None,
                      with_asset_path: bool = True) -> ResolvedProfile:
        """Resolve candidates to a profile and, unless previewing, its asset path.

        With `with_asset_path=False` no handedness is needed; the caller can
        inspect `available_handedness(result.profile)` before a device exists.
        """
        if with_asset_path:
            if handedness is None:
                raise ValidationError("handedness is required to resolve an asset path")
            try:
                handedness = Handedness(handedness)
            except ValueError as e:
                raise ValidationError(f"unknown handedness {handedness!r}") from e

        profiles_list = await self.fetch_profiles_list()
        entry = self.select_entry(candidates, profiles_list)
        profile = Profile.from_dict(await self.fetch_json(entry.path))
        if profile.profile_id != entry.profile_id:
            LOG.warning("profile at %s declares id %s, expected %s", entry.path, profile.profile_id, entry.profile_id)

        asset_path = None
        if with_asset_path:
            asset_path = self.asset_path_for(profile, entry, handedness)
        LOG.info("resolved %s -> profile %s (asset %s)", list(candidates), profile.profile_id, asset_path)
        return ResolvedProfile(profile, asset_path, entry.path, entry.deprecated)

    async def resolve_for(self, input_source) -> ResolvedProfile:
        return await self.resolve(input_source.profiles, input_source.handedness)
