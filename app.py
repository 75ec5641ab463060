"""Entry point for motionbridge

Resolves a profile for a gamepad, builds a motion controller and polls it at a
fixed rate, logging the per-component data snapshot.
"""
import argparse
import asyncio
import json
import logging
import time

from core.config import DEFAULT_CONFIG, load_config
from core.errors import MotionBridgeError
from core.state import Handedness
from devices.mock_gamepad import MockGamepad, MockInputSource
from devices.pygame_gamepad import PygameInputSource
from motion_controller import ControllerSelection
from profile_resolver import ProfileResolver, available_handedness

LOG = logging.getLogger("motionbridge")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="motionbridge: gamepad input → visual response weights")
    parser.add_argument("--profiles-base", help="profile repository directory or http(s) URL")
    parser.add_argument("--profile", action="append", default=[], dest="profiles",
                        help="candidate profile id, most specific first (repeatable)")
    parser.add_argument("--handedness", default=Handedness.NONE.value,
                        choices=[Handedness.NONE.value, Handedness.LEFT.value, Handedness.RIGHT.value])
    parser.add_argument("--joystick", type=int, default=None, help="pygame joystick index")
    parser.add_argument("--mock", action="store_true", help="use a mock gamepad instead of a joystick")
    parser.add_argument("--preview", action="store_true",
                        help="resolve the profile, list its handedness values and exit")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--hz", type=int, default=None, help="update frequency")
    parser.add_argument("--frames", type=int, default=0, help="stop after N frames (0 = run until Ctrl+C)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-format", default="%(levelname)s:%(name)s:%(message)s",
                        help="Logging format string (default: %(levelname)s:%(name)s:%(message)s)")
    parser.add_argument("--debug-modules", nargs="*", default=[],
                        help="Modules to set to DEBUG level (e.g., 'controller', 'resolver', 'gamepad')")
    return parser


def configure_logging(args):
    logging.basicConfig(level=getattr(logging, args.log_level), format=args.log_format)
    for module in args.debug_modules:
        logging.getLogger(f"motionbridge.{module}").setLevel(logging.DEBUG)


async def preview(resolver: ProfileResolver, candidates):
    resolved = await resolver.resolve(candidates, with_asset_path=False)
    return resolved.profile, available_handedness(resolved.profile)


async def select(resolver: ProfileResolver, config, args):
    selection = ControllerSelection(resolver, config=config)
    if args.mock:
        resolved = await resolver.resolve(args.profiles, with_asset_path=False)
        gamepad = MockGamepad(resolved.profile, args.handedness)
        source = MockInputSource(gamepad, args.handedness, profiles=args.profiles or [gamepad.id])
    else:
        source = PygameInputSource(args.profiles, args.handedness, joystick_index=args.joystick)
    return await selection.select(source)


def run_loop(controller, hz: int, frames: int):
    period = 1.0 / float(hz)
    count = 0
    try:
        while not frames or count < frames:
            try:
                controller.update_from_gamepad()
                LOG.debug("data -> %s", json.dumps(controller.data))
            except Exception:
                LOG.exception("error in update loop")
            count += 1
            time.sleep(period)
    except KeyboardInterrupt:
        LOG.info("shutdown requested")
    return count


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args)

    async def resolve(config):
        async with ProfileResolver.from_config(config) as resolver:
            if args.preview:
                return await preview(resolver, args.profiles)
            return await select(resolver, config, args)

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        config = config.with_overrides(profiles_base=args.profiles_base, hz=args.hz)
        result = asyncio.run(resolve(config))
    except MotionBridgeError as e:
        LOG.error("%s", e)
        return 1

    if args.preview:
        profile, handedness = result
        print(json.dumps({"profileId": profile.profile_id, "handedness": [h.value for h in handedness]}))
        return 0

    controller = result
    LOG.info("motionbridge running (%s, asset %s) — press Ctrl+C to stop",
             controller.profile_id, controller.asset_url)
    run_loop(controller, config.hz, args.frames)
    print(json.dumps(controller.data, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
