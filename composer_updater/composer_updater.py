#!/usr/bin/env python

"""Keeps composer.json of WordPress repositories in sync with their plugins."""

import argparse
import sys

from composer_updater.cli_extensions import LocalCommands, RunCommands
from composer_updater.output import MessageType, VerbosityLevel, get_output, message

# Grouped command help text
COMMAND_GROUPS = """
runtime commands:
  run                 Update composer.json in the repository and open a pull request

local commands:
  generate            Create or update composer.json in a local checkout
  check               Show where a single plugin would be installed from
"""


class GroupedHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that hides the subparser choices from positional arguments."""

    def _format_action(self, action):
        # Skip formatting subparser actions entirely (we show them in epilog)
        if isinstance(action, argparse._SubParsersAction):
            return ""
        return super()._format_action(action)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all commands registered."""
    parser = argparse.ArgumentParser(
        prog="composer-updater",
        description="Generate and update composer.json for WordPress repositories",
        formatter_class=GroupedHelpFormatter,
        epilog=COMMAND_GROUPS,
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase verbosity (-v, -vv, -vvv)",
    )
    parser.add_argument(
        "--no-color", action="store_true",
        help="Disable colored output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    RunCommands.add_cli_arguments(subparsers)    # run
    LocalCommands.add_cli_arguments(subparsers)  # generate + check

    return parser


def main() -> None:
    """Main entry point for the composer-updater CLI."""
    parser = build_parser()
    args = parser.parse_args()

    # Configure output system
    output_mgr = get_output()
    output_mgr.verbosity = args.verbose
    output_mgr.use_color = not args.no_color and sys.stdout.isatty()

    message(
        f"Command: {args.command}",
        MessageType.DEBUG,
        VerbosityLevel.DEBUG,
    )

    if args.command == "run":
        RunCommands.process_cli_command(args)
        return

    if args.command in ("generate", "check"):
        LocalCommands.process_cli_command(args)
        return

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
