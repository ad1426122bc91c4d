"""
Flagline Command Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import Any

from flagline.config import find_config, load_registry
from flagline.console import console
from flagline.exceptions import FlaglineError
from flagline.render import render_error, render_help
from flagline.shell import run_shell
from flagline.themes import OneColors
from flagline.utils import setup_logging


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="flagline",
        description="Evaluate command lines against commands declared in a config file.",
        epilog="Without LINE an interactive shell is started.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="YAML or TOML file declaring the commands (searched for if omitted)",
    )
    parser.add_argument("line", nargs="?", help="Command line to evaluate and run")
    parser.add_argument(
        "--help-commands",
        action="store_true",
        help="List the declared commands and exit",
    )
    parser.add_argument(
        "--log-mode",
        choices=["cli", "json"],
        default=None,
        help="Logging format (defaults to $FLAGLINE_LOG_MODE)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file",
    )
    return parser


def bootstrap(config: str | None) -> Path | None:
    """Resolve the config path and make its directory importable for actions."""
    config_path = Path(config) if config else find_config()
    if config_path and str(config_path.parent.resolve()) not in sys.path:
        sys.path.insert(0, str(config_path.parent.resolve()))
    return config_path


def main(argv: list[str] | None = None) -> Any:
    args = get_parser().parse_args(argv)
    setup_logging(mode=args.log_mode, log_filename=args.log_file)

    config_path = bootstrap(args.config)
    if config_path is None:
        console.print(
            f"[{OneColors.DARK_RED}]❌ No config file given and none found.[/]\n"
            f"[{OneColors.COMMENT_GREY}]Looked for flagline.yaml / flagline.toml in "
            "the current directory, $FLAGLINE_CONFIG and ~/.config/flagline/."
        )
        return 1

    try:
        registry = load_registry(config_path)
    except (FileNotFoundError, ValueError) as error:
        console.print(f"[{OneColors.DARK_RED}]❌ {error}[/]")
        return 1
    except FlaglineError as error:
        render_error(error)
        return 1

    if args.help_commands:
        render_help(registry)
        return 0

    if args.line is None:
        asyncio.run(run_shell(registry))
        return 0

    try:
        result = asyncio.run(registry.execute(args.line))
    except FlaglineError as error:
        render_error(error, args.line)
        return 1
    if result is not None:
        console.print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
