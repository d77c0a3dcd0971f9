"""Command-line entry point: set up the environment and optionally launch a command"""

import argparse
import logging
import os
import subprocess
import sys
from typing import List, Optional

from natively.core.config import PROFILES, ConfigurationSet, settings
from natively.core.exceptions import InvalidConfiguration
from natively.core.redis_client import check_connection
from natively.services.initializer import EnvironmentInitializer, render_exports
from natively.services.overrides import from_environment, load_env_file, merge, parse_assignments

logger = logging.getLogger(__name__)

EXIT_CHECK_FAILED = 3
EXIT_COMMAND_NOT_FOUND = 127


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="natively-env",
        description="Set MESHES_DIR, SCENARIO_DIR, REDIS_HOST and REDIS_PORT for the visualization node",
    )
    parser.add_argument("--profile", type=str, default=None, choices=sorted(PROFILES),
                        help=f"Default profile (default: {settings.PROFILE})")
    parser.add_argument("--set", dest="assignments", action="append", default=[],
                        metavar="KEY=VALUE", help="Override a key (repeatable)")
    parser.add_argument("--env-file", type=str, default=None, help="Read overrides from a dotenv file")
    parser.add_argument("--inherit", action="store_true",
                        help="Use values already present in the current environment")
    parser.add_argument("--meshes-dir", type=str, default=None, help="Mesh asset directory")
    parser.add_argument("--scenario-dir", type=str, default=None, help="Scenario transforms directory")
    parser.add_argument("--redis-host", type=str, default=None, help="Redis host")
    parser.add_argument("--redis-port", type=str, default=None, help="Redis port")
    parser.add_argument("--strict", action="store_true", default=settings.STRICT,
                        help="Fail when a value resolves to an empty string")
    parser.add_argument("--no-strict", dest="strict", action="store_false",
                        help="Allow empty values even when NATIVELY_STRICT is set")
    parser.add_argument("--export", action="store_true",
                        help="Print shell export lines on stdout (summary goes to stderr)")
    parser.add_argument("--check", action="store_true",
                        help="Probe Redis and check that the directories exist")
    parser.add_argument("--log-level", type=str.upper, default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    parser.add_argument("command", nargs=argparse.REMAINDER,
                        help="Command to run with the environment (after --)")
    return parser


def collect_overrides(args: argparse.Namespace) -> dict:
    """Lowest to highest: inherited env, env file, --set, dedicated flags"""
    flags = {
        "MESHES_DIR": args.meshes_dir,
        "SCENARIO_DIR": args.scenario_dir,
        "REDIS_HOST": args.redis_host,
        "REDIS_PORT": args.redis_port,
    }
    return merge(
        from_environment() if args.inherit else None,
        load_env_file(args.env_file) if args.env_file else None,
        parse_assignments(args.assignments),
        flags,
    )


def run_checks(config: ConfigurationSet) -> bool:
    ok = True
    for key in ("MESHES_DIR", "SCENARIO_DIR"):
        path = getattr(config, key)
        if not os.path.isdir(path):
            logger.warning(f"{key} does not point to an existing directory: {path}")
            ok = False
    if not check_connection(config.REDIS_HOST, config.REDIS_PORT):
        logger.warning(f"Redis is not reachable at {config.REDIS_HOST}:{config.REDIS_PORT}")
        ok = False
    return ok


def run_command(command: List[str]) -> int:
    logger.info(f"Launching: {' '.join(command)}")
    try:
        completed = subprocess.run(command, env=dict(os.environ))
    except FileNotFoundError:
        logger.error(f"Command not found: {command[0]}")
        return EXIT_COMMAND_NOT_FOUND
    return completed.returncode


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level,
                        format="%(levelname)s %(name)s: %(message)s")

    command = args.command
    if command and command[0] == "--":
        command = command[1:]

    try:
        initializer = EnvironmentInitializer(profile=args.profile, strict=args.strict)
        config = initializer.resolve(collect_overrides(args))
    except InvalidConfiguration as e:
        parser.error(str(e))

    initializer.publish(config)
    if args.export:
        initializer.report(config, stream=sys.stderr)
        print("\n".join(render_exports(config)))
    else:
        initializer.report(config)

    if args.check and not run_checks(config):
        return EXIT_CHECK_FAILED

    if command:
        return run_command(command)
    return 0


if __name__ == "__main__":
    sys.exit(main())
