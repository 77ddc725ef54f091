"""CLI commands that work on a local checkout without publishing."""

import argparse
import sys
from pathlib import Path

from composer_updater.config import Config, ConfigError
from composer_updater.core import Classifier, ComposerUpdaterError, GitHubWordPressProbe, verify_project_layout
from composer_updater.core import persistence
from composer_updater.core.runner import build_composer
from composer_updater.output import MessageType, VerbosityLevel, message


class LocalCommands:
    """Manages the ``generate`` and ``check`` CLI commands."""

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add local CLI commands.

        Args:
            subparsers: The argparse subparsers to add to
        """
        generate_parser = subparsers.add_parser(
            "generate", help="Create or update composer.json in a local WordPress checkout"
        )
        generate_parser.add_argument("directory", type=Path, help="WordPress root directory")
        generate_parser.add_argument("--name", help="Composer project name (default: <parent>/<directory>)")
        generate_parser.add_argument(
            "--dry-run", action="store_true", help="Print the result instead of writing composer.json"
        )
        generate_parser.add_argument("--config", type=Path, default=None, help="YAML settings file")

        check_parser = subparsers.add_parser("check", help="Show where a single plugin would be installed from")
        check_parser.add_argument("plugin", help="Plugin slug")
        check_parser.add_argument("--config", type=Path, default=None, help="YAML settings file")

    @staticmethod
    def _classifier(config_file: Path | None) -> tuple[Classifier, str]:
        config_data = Config(config_file=config_file).read(require_remote=False)
        organization = config_data.get("organization", "")
        probe = GitHubWordPressProbe(
            config_data.get("github_token", ""),
            organization=organization,
            timeout=float(config_data.get("timeout", 30.0)),
        )
        return Classifier(probe), organization

    @staticmethod
    def process_cli_command(args: argparse.Namespace) -> None:
        """Process local CLI commands.

        Args:
            args: Parsed command-line arguments
        """
        try:
            if args.command == "generate":
                LocalCommands.generate(args)
            elif args.command == "check":
                LocalCommands.check(args)
        except (ComposerUpdaterError, ConfigError) as e:
            message(f"Failed: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)
        except Exception as e:
            message(f"Failed: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)

    @staticmethod
    def generate(args: argparse.Namespace) -> None:
        """Build composer.json for ``args.directory``."""
        directory = args.directory.resolve()
        verify_project_layout(directory)

        classifier, organization = LocalCommands._classifier(args.config)
        name = args.name or f"{directory.parent.name}/{directory.name}"
        built = build_composer(directory, name, classifier, organization)

        if args.dry_run:
            message(persistence.dumps(built.manifest).rstrip("\n"), MessageType.NORMAL, VerbosityLevel.ALWAYS)
        else:
            persistence.store(directory, built.manifest)
            message(f"Wrote {persistence.composer_path(directory)}", MessageType.SUCCESS, VerbosityLevel.ALWAYS)

        for plugin in built.failed:
            reason = classifier.probe_errors.get(plugin)
            suffix = f" (registry error: {reason})" if reason else ""
            message(f"Could not resolve plugin: {plugin}{suffix}", MessageType.WARNING, VerbosityLevel.ALWAYS)

    @staticmethod
    def check(args: argparse.Namespace) -> None:
        """Print the classification of ``args.plugin``."""
        classifier, _ = LocalCommands._classifier(args.config)
        kind = classifier.classify(args.plugin)
        message(f"{args.plugin}: {kind.value}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
