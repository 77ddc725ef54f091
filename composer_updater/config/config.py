"""Configuration management class for composer-updater.

Settings are merged from three sources, later ones winning:

1. an optional YAML file (``.composer-updater.yaml`` by default)
2. the GitHub Actions environment (``INPUT_*``, ``GITHUB_REPOSITORY``,
   ``GITHUB_REF``)
3. explicit overrides, usually from the command line
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypedDict

import yaml

from composer_updater.core.classifier import DEFAULT_ORGANIZATION
from composer_updater.output import MessageType, VerbosityLevel, message

DEFAULT_CONFIG_FILE = ".composer-updater.yaml"

# Config key -> environment variable set by the Actions runner
ENV_KEYS = {
    "github_token": "INPUT_GITHUB_TOKEN",
    "approval_github_token": "INPUT_APPROVAL_GITHUB_TOKEN",
    "committer_username": "INPUT_COMMITTER_USERNAME",
    "committer_email": "INPUT_COMMITTER_EMAIL",
    "organization": "INPUT_ORGANIZATION",
    "repository": "GITHUB_REPOSITORY",
    "ref": "GITHUB_REF",
}

DEFAULTS: dict[str, Any] = {
    "approval_github_token": "",
    "committer_username": "web-flow",
    "committer_email": "noreply@github.com",
    "organization": DEFAULT_ORGANIZATION,
    "work_dir": "clones",
    "timeout": 30.0,
}

STRING_KEYS = (
    "github_token",
    "approval_github_token",
    "committer_username",
    "committer_email",
    "organization",
    "repository",
    "ref",
    "work_dir",
)


class DelayData(TypedDict, total=False):
    """Type definition for the auto-merge delays (seconds)."""

    approve: float
    merge: float
    delete: float


class ConfigData(TypedDict, total=False):
    """Type definition for the configuration structure."""

    github_token: str
    approval_github_token: str
    committer_username: str
    committer_email: str
    organization: str
    repository: str
    ref: str
    work_dir: str
    timeout: float
    delays: DelayData


def _is_owner_and_repo(repository: str) -> bool:
    parts = repository.strip("/").split("/")
    return len(parts) == 2 and all(parts)


class ConfigError(Exception):
    """Exception raised for configuration validation errors.

    Can contain multiple error messages.
    """

    def __init__(self, errors: str | list[str]):
        """Initialize ConfigError.

        Args:
            errors: Single error message or list of error messages
        """
        if isinstance(errors, str):
            self.errors = [errors]
        else:
            self.errors = errors
        super().__init__(self._format_errors())

    def _format_errors(self) -> str:
        """Format errors for display."""
        if len(self.errors) == 1:
            return self.errors[0]
        error_list = "\n".join(f"  - {err}" for err in self.errors)
        return f"Configuration has {len(self.errors)} errors:\n{error_list}"


class Config:
    """Loads and validates composer-updater settings."""

    def __init__(self, config_file: Path | None = None, environ: Mapping[str, str] | None = None):
        """Initialize the Config loader.

        Args:
            config_file: Optional YAML settings file.
                         Defaults to ./.composer-updater.yaml
            environ: Environment to read; defaults to ``os.environ``
        """
        self.config_file = config_file if config_file is not None else Path(DEFAULT_CONFIG_FILE)
        self.environ = environ if environ is not None else os.environ

    def read_file(self) -> dict[str, Any]:
        """Read the YAML settings file.

        Returns:
            File contents, or an empty dict if the file does not exist

        Raises:
            ConfigError: If the file cannot be parsed
        """
        if not self.config_file.exists():
            message(f"No config file at {self.config_file}", MessageType.DEBUG, VerbosityLevel.DEBUG)
            return {}

        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_file}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read {self.config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_file} must contain a mapping")
        return data

    def read_environment(self) -> dict[str, Any]:
        """Collect settings from the Actions environment (empty values are skipped)."""
        data: dict[str, Any] = {}
        for key, env_name in ENV_KEYS.items():
            value = self.environ.get(env_name, "").strip()
            if value:
                data[key] = value
        return data

    def read(self, overrides: Mapping[str, Any] | None = None, require_remote: bool = True) -> ConfigData:
        """Merge all sources into a validated configuration.

        Args:
            overrides: Highest-precedence values; ``None`` values are ignored
            require_remote: Whether token and repository coordinates are needed

        Returns:
            Validated configuration

        Raises:
            ConfigError: If the merged configuration is invalid
        """
        config: dict[str, Any] = dict(DEFAULTS)
        config.update(self.read_file())
        config.update(self.read_environment())
        if overrides:
            config.update({k: v for k, v in overrides.items() if v is not None})

        self.validate(config, require_remote=require_remote)
        message("Configuration loaded", MessageType.DEBUG, VerbosityLevel.DEBUG)
        return ConfigData(**config)  # type: ignore[typeddict-item]

    @staticmethod
    def validate(config: dict[str, Any], require_remote: bool = True) -> None:
        """Validate the configuration structure.

        Collects all validation errors before raising an exception.

        Args:
            config: The configuration dictionary to validate
            require_remote: Whether token and repository coordinates are needed

        Raises:
            ConfigError: If the configuration is invalid, with all errors
        """
        errors: list[str] = []

        for key in STRING_KEYS:
            if key in config and not isinstance(config[key], str):
                errors.append(f"'{key}' must be a string, got {type(config[key]).__name__}")

        if require_remote:
            if not config.get("github_token"):
                errors.append("'github_token' is required")

            repository = config.get("repository")
            if not repository:
                errors.append("'repository' is required (owner/repo)")
            elif isinstance(repository, str) and not _is_owner_and_repo(repository):
                errors.append(f"'repository' must look like owner/repo, got '{repository}'")

            ref = config.get("ref")
            if not ref:
                errors.append("'ref' is required (refs/heads/<branch>)")
            elif isinstance(ref, str) and not ref.startswith("refs/heads/"):
                errors.append(f"'ref' must be a branch ref (refs/heads/<branch>), got '{ref}'")

        if "timeout" in config:
            try:
                if float(config["timeout"]) <= 0:
                    errors.append("'timeout' must be positive")
            except (TypeError, ValueError):
                errors.append(f"'timeout' must be a number, got {config['timeout']!r}")

        if "delays" in config:
            delays = config["delays"]
            if not isinstance(delays, dict):
                errors.append("'delays' must be a dictionary")
            else:
                for name, value in delays.items():
                    if name not in ("approve", "merge", "delete"):
                        errors.append(f"Unknown delay '{name}' (expected approve, merge or delete)")
                    elif isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                        errors.append(f"Delay '{name}' must be a non-negative number")

        if errors:
            raise ConfigError(errors)

    @staticmethod
    def owner_and_repo(config: ConfigData) -> tuple[str, str]:
        """Split ``repository`` into owner and name."""
        owner, repo = config["repository"].strip("/").split("/")
        return owner, repo

    @staticmethod
    def branch(config: ConfigData) -> str:
        """Return the branch name of ``ref`` (``refs/heads/feature/x`` -> ``feature/x``)."""
        return config["ref"].removeprefix("refs/heads/")
