"""Tests for the recursive candidate scan."""

from __future__ import annotations

import logging
import os

from fqcn.namespace import Psr4Namespace
from fqcn.phases.scanning import scan_directory

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")
PROJECT_DIR = os.path.join(FIXTURES_DIR, "php_project")


def _touch(path, content="<?php\n"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


class TestScanDirectory:
    def test_derives_names_from_relative_paths(self, tmp_path):
        _touch(tmp_path / "User.php")
        _touch(tmp_path / "Nested" / "Deep" / "Thing.php")

        names = scan_directory(str(tmp_path), Psr4Namespace("App\\Models"))
        assert set(names) == {"App\\Models\\User", "App\\Models\\Nested\\Deep\\Thing"}

    def test_ignores_other_extensions(self, tmp_path):
        _touch(tmp_path / "User.php")
        _touch(tmp_path / "notes.txt")
        _touch(tmp_path / "User.php.bak")
        _touch(tmp_path / "template.phtml")

        assert scan_directory(str(tmp_path), Psr4Namespace("App")) == ["App\\User"]

    def test_extension_match_is_case_insensitive(self, tmp_path):
        _touch(tmp_path / "Upper.PHP")
        _touch(tmp_path / "Mixed.Php")

        names = scan_directory(str(tmp_path), Psr4Namespace("App"))
        assert sorted(names) == ["App\\Mixed", "App\\Upper"]

    def test_custom_extensions(self, tmp_path):
        _touch(tmp_path / "Models" / "User.src")
        _touch(tmp_path / "Models" / "Post.php")

        names = scan_directory(str(tmp_path), Psr4Namespace("App"), extensions=[".src"])
        assert names == ["App\\Models\\User"]

    def test_bare_extension_is_not_a_candidate(self, tmp_path):
        _touch(tmp_path / ".php")
        assert scan_directory(str(tmp_path), Psr4Namespace("App")) == []

    def test_empty_directory(self, tmp_path):
        assert scan_directory(str(tmp_path), Psr4Namespace("App")) == []

    def test_unreadable_directory_is_skipped(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="fqcn.phases.scanning"):
            names = scan_directory(str(tmp_path / "missing"), Psr4Namespace("App"))
        assert names == []
        assert "Skipping unreadable entry" in caplog.text

    def test_follows_symlinked_directories(self, tmp_path):
        _touch(tmp_path / "real" / "Linked.php")
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "Shared").symlink_to(tmp_path / "real", target_is_directory=True)

        names = scan_directory(str(tmp_path / "base"), Psr4Namespace("App"))
        assert names == ["App\\Shared\\Linked"]

        names = scan_directory(str(tmp_path / "base"), Psr4Namespace("App"), follow_symlinks=False)
        assert names == []

    def test_fixture_project(self):
        names = scan_directory(
            os.path.join(PROJECT_DIR, "src", "Models"), Psr4Namespace("App\\Models")
        )
        assert set(names) == {
            "App\\Models\\Admin",
            "App\\Models\\Model",
            "App\\Models\\User",
            "App\\Models\\Nested\\Deep",
        }

    def test_names_match_files_one_to_one(self):
        directory = os.path.join(PROJECT_DIR, "src")
        names = scan_directory(directory, Psr4Namespace("App"))

        expected = set()
        for dirpath, _, filenames in os.walk(directory):
            for filename in filenames:
                if filename.endswith(".php"):
                    rel = os.path.relpath(os.path.join(dirpath, filename), directory)
                    expected.add("App\\" + rel[:-4].replace(os.sep, "\\"))
        assert len(names) == len(set(names))
        assert set(names) == expected
