"""Tests for config/config.py - Configuration management."""

from pathlib import Path

import pytest
import yaml

from composer_updater.config.config import DEFAULT_CONFIG_FILE, Config, ConfigError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _actions_env(**overrides):
    """Return a minimal GitHub Actions environment, with optional overrides."""
    base = {
        "INPUT_GITHUB_TOKEN": "tok",
        "GITHUB_REPOSITORY": "designcontainer/site",
        "GITHUB_REF": "refs/heads/main",
    }
    base.update(overrides)
    return base


def _write_config(path: Path, data) -> Path:
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    return path


# ===========================================================================
# ConfigError
# ===========================================================================
class TestConfigError:
    """Test cases for ConfigError exception."""

    def test_single_error_message(self):
        error = ConfigError("Single error")
        assert len(error.errors) == 1
        assert str(error) == "Single error"

    def test_multiple_error_messages(self):
        error = ConfigError(["Error 1", "Error 2", "Error 3"])
        assert len(error.errors) == 3
        assert "Configuration has 3 errors" in str(error)
        assert "  - Error 2" in str(error)


# ===========================================================================
# Config.__init__
# ===========================================================================
class TestConfigInitialization:

    def test_default_config_file(self):
        assert Config(environ={}).config_file == Path(DEFAULT_CONFIG_FILE)

    def test_custom_config_file(self, tmp_path):
        assert Config(tmp_path / "x.yaml", environ={}).config_file == tmp_path / "x.yaml"


# ===========================================================================
# read_file
# ===========================================================================
class TestConfigReadFile:

    def test_missing_file(self, tmp_path):
        assert Config(tmp_path / "none.yaml", environ={}).read_file() == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("")
        assert Config(path, environ={}).read_file() == {}

    def test_reads_mapping(self, tmp_path):
        path = _write_config(tmp_path / "c.yaml", {"organization": "acme"})
        assert Config(path, environ={}).read_file() == {"organization": "acme"}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            Config(path, environ={}).read_file()

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            Config(path, environ={}).read_file()


# ===========================================================================
# read
# ===========================================================================
class TestConfigRead:

    def test_from_environment(self, tmp_path):
        config = Config(tmp_path / "none.yaml", environ=_actions_env()).read()
        assert config["github_token"] == "tok"
        assert config["repository"] == "designcontainer/site"
        assert config["ref"] == "refs/heads/main"
        assert config["organization"] == "designcontainer"
        assert config["approval_github_token"] == ""
        assert config["timeout"] == 30.0

    def test_empty_env_values_ignored(self, tmp_path):
        env = _actions_env(INPUT_COMMITTER_USERNAME="  ")
        config = Config(tmp_path / "none.yaml", environ=env).read()
        assert config["committer_username"] == "web-flow"

    def test_precedence(self, tmp_path):
        path = _write_config(tmp_path / "c.yaml", {"organization": "from-file", "committer_email": "file@x"})
        env = _actions_env(INPUT_ORGANIZATION="from-env")
        config = Config(path, environ=env).read({"organization": "from-cli", "work_dir": None})
        assert config["organization"] == "from-cli"
        assert config["committer_email"] == "file@x"
        assert config["work_dir"] == "clones"

    def test_delays_from_file(self, tmp_path):
        path = _write_config(tmp_path / "c.yaml", {"delays": {"approve": 10, "merge": 0}})
        config = Config(path, environ=_actions_env()).read()
        assert config["delays"] == {"approve": 10, "merge": 0}

    def test_missing_remote_settings(self, tmp_path):
        with pytest.raises(ConfigError) as exc:
            Config(tmp_path / "none.yaml", environ={}).read()
        assert len(exc.value.errors) == 3

    def test_local_mode_needs_no_token(self, tmp_path):
        config = Config(tmp_path / "none.yaml", environ={}).read(require_remote=False)
        assert "github_token" not in config


# ===========================================================================
# validate
# ===========================================================================
class TestConfigValidate:

    def _valid(self, **overrides):
        base = {"github_token": "t", "repository": "a/b", "ref": "refs/heads/main"}
        base.update(overrides)
        return base

    def test_valid(self):
        Config.validate(self._valid())

    def test_bad_repository(self):
        with pytest.raises(ConfigError, match="owner/repo"):
            Config.validate(self._valid(repository="justname"))

    def test_empty_repository_segment(self):
        with pytest.raises(ConfigError, match="owner/repo"):
            Config.validate(self._valid(repository="owner//repo"))

    def test_surrounding_slashes_allowed(self):
        config = self._valid(repository="/owner/repo/")
        Config.validate(config)
        assert Config.owner_and_repo(config) == ("owner", "repo")

    def test_tag_ref_rejected(self):
        with pytest.raises(ConfigError, match="branch ref"):
            Config.validate(self._valid(ref="refs/tags/v1"))

    def test_non_string_value(self):
        with pytest.raises(ConfigError, match="'organization' must be a string"):
            Config.validate(self._valid(organization=5))

    def test_bad_timeout(self):
        with pytest.raises(ConfigError, match="timeout"):
            Config.validate(self._valid(timeout="soon"))

    def test_negative_timeout(self):
        with pytest.raises(ConfigError, match="positive"):
            Config.validate(self._valid(timeout=0))

    def test_bad_delays(self):
        with pytest.raises(ConfigError) as exc:
            Config.validate(self._valid(delays={"approve": -1, "later": 1}))
        assert len(exc.value.errors) == 2

    def test_delays_not_mapping(self):
        with pytest.raises(ConfigError, match="'delays' must be a dictionary"):
            Config.validate(self._valid(delays=[1, 2]))

    def test_collects_all_errors(self):
        with pytest.raises(ConfigError) as exc:
            Config.validate({"repository": "x", "ref": "main", "timeout": -1})
        assert len(exc.value.errors) == 4


# ===========================================================================
# Coordinates
# ===========================================================================
class TestConfigCoordinates:

    def test_owner_and_repo(self):
        assert Config.owner_and_repo({"repository": "designcontainer/site"}) == ("designcontainer", "site")

    def test_branch(self):
        assert Config.branch({"ref": "refs/heads/main"}) == "main"

    def test_branch_with_slashes(self):
        assert Config.branch({"ref": "refs/heads/feature/composer"}) == "feature/composer"
