"""
Runs the CocoaPods sync step from the command line.

    podsync --workspace /path/to/workspace --project-root ios/App --clean-pods
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from podsync.dependency_sync_step import DISPLAY_NAME, DependencySyncStep
from podsync.podsync_config import PODSYNC_TOML_NAME, StepConfig
from podsync.podsync_exceptions import PodSyncConfigError
from podsync.step_models import ExecutionContext


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="podsync", description=DISPLAY_NAME)
    parser.add_argument(
        "--workspace", default=os.getcwd(), help="Build workspace (default: current directory)"
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"TOML file with a [podsync] table (default: <workspace>/{PODSYNC_TOML_NAME} if present)",
    )
    parser.add_argument("--project-root", default=None, help="Podfile directory relative to the workspace")
    parser.add_argument("--clean-pods", action=argparse.BooleanOptionalAction, default=None, help="Remove Pods before refreshing")
    parser.add_argument("--verbose", action=argparse.BooleanOptionalAction, default=None, help="Run pod install with --verbose")
    parser.add_argument(
        "--define", "-D", action="append", default=[], metavar="KEY=VALUE",
        help="Build variable added to the environment, may be repeated",
    )
    return parser


def load_config(args: argparse.Namespace) -> StepConfig:
    """Merge the TOML configuration with the command-line overrides."""
    config_path = args.config
    if config_path is None:
        default_path = os.path.join(args.workspace, PODSYNC_TOML_NAME)
        if os.path.exists(default_path):
            config_path = default_path

    config = StepConfig.from_toml(config_path) if config_path else StepConfig()

    overrides = {
        "clean_pods": args.clean_pods,
        "verbose": args.verbose,
        "project_root": args.project_root,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return config
    return StepConfig.from_dict({**config.to_dict(), **overrides})


def parse_build_variables(defines: List[str]) -> dict:
    build_variables = {}
    for define in defines:
        key, sep, value = define.partition("=")
        if not sep or not key:
            raise PodSyncConfigError(f"Build variable must be KEY=VALUE: {define}")
        build_variables[key] = value
    return build_variables


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
        build_variables = parse_build_variables(args.define)
    except PodSyncConfigError as e:
        print(str(e), file=sys.stderr)
        return 2

    ctx = ExecutionContext.from_host(args.workspace, build_variables=build_variables)
    success = DependencySyncStep().execute(config, ctx, sys.stdout)
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
