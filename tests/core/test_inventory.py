"""Tests for core/inventory.py - Plugin directory listing."""

import pytest

from composer_updater.core.errors import NotFoundError
from composer_updater.core.inventory import list_plugins, plugins_path, verify_project_layout


def _wordpress_root(tmp_path, plugins=()):
    plugins_dir = tmp_path / "wp-content" / "plugins"
    plugins_dir.mkdir(parents=True)
    for name in plugins:
        (plugins_dir / name).mkdir()
    return tmp_path


class TestListPlugins:

    def test_lists_directories(self, tmp_path):
        root = _wordpress_root(tmp_path, ["akismet", "acme-widget"])
        assert sorted(list_plugins(root)) == ["acme-widget", "akismet"]

    def test_skips_files(self, tmp_path):
        root = _wordpress_root(tmp_path, ["akismet"])
        (plugins_path(root) / "index.php").write_text("<?php // Silence is golden.")
        assert list_plugins(root) == ["akismet"]

    def test_empty(self, tmp_path):
        assert list_plugins(_wordpress_root(tmp_path)) == []

    def test_missing_folder_raises(self, tmp_path):
        with pytest.raises(OSError):
            list_plugins(tmp_path)


class TestVerifyProjectLayout:

    def test_valid(self, tmp_path):
        verify_project_layout(_wordpress_root(tmp_path))

    def test_missing_wp_content(self, tmp_path):
        with pytest.raises(NotFoundError, match="Missing folder: wp-content$"):
            verify_project_layout(tmp_path)

    def test_missing_plugins(self, tmp_path):
        (tmp_path / "wp-content").mkdir()
        with pytest.raises(NotFoundError, match="wp-content/plugins"):
            verify_project_layout(tmp_path)
