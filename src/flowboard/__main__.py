"""CLI entry point for flowboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging
from .models import FlowConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="flow",
        description="Terminal Kanban board with instant card moves",
    )
    parser.add_argument(
        "--board",
        type=Path,
        default=None,
        help="Path to the board directory (default: $FLOW_BOARD_PATH or ~/.config/flow/boards/default)",
    )
    parser.add_argument(
        "--provider",
        choices=FlowConfig.VALID_PROVIDERS,
        default=None,
        help="Storage provider (default: from flow.yml, else local)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Build settings from CLI args on top of the environment."""
    settings_kwargs: dict = {}
    if args.board:
        settings_kwargs["board_path"] = args.board
    if args.provider:
        settings_kwargs["provider"] = args.provider
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main() -> None:
    """Main entry point."""
    args = parse_args()
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file)

    # Import here so --help and --version stay fast
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
