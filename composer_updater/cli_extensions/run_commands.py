"""CLI command for the full update run."""

import argparse
import sys
from pathlib import Path

from composer_updater.config import Config, ConfigError
from composer_updater.core import ComposerUpdaterError
from composer_updater.core.runner import run
from composer_updater.output import MessageType, VerbosityLevel, message


class RunCommands:
    """Manages the ``run`` CLI command."""

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add the run command and its options.

        Args:
            subparsers: The argparse subparsers to add to
        """
        run_parser = subparsers.add_parser(
            "run", help="Clone the repository, update composer.json and open a pull request"
        )
        run_parser.add_argument(
            "--config", type=Path, default=None, help="YAML settings file (default: .composer-updater.yaml)"
        )
        run_parser.add_argument("--repository", help="Target repository as owner/repo")
        run_parser.add_argument("--ref", help="Base branch ref, e.g. refs/heads/main")
        run_parser.add_argument("--organization", help="GitHub organisation hosting internal plugins")
        run_parser.add_argument("--work-dir", dest="work_dir", help="Directory to clone into")

    @staticmethod
    def overrides_from_args(args: argparse.Namespace) -> dict:
        """Collect config overrides given on the command line."""
        return {
            "repository": getattr(args, "repository", None),
            "ref": getattr(args, "ref", None),
            "organization": getattr(args, "organization", None),
            "work_dir": getattr(args, "work_dir", None),
        }

    @staticmethod
    def process_cli_command(args: argparse.Namespace) -> None:
        """Process the run command.

        Args:
            args: Parsed command-line arguments
        """
        try:
            config_data = Config(config_file=args.config).read(RunCommands.overrides_from_args(args))
            run(config_data)
        except (ComposerUpdaterError, ConfigError) as e:
            message(f"Action failed because of: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)
        except Exception as e:
            message(f"Action failed because of: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)
