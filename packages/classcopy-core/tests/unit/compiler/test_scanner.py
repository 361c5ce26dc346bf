"""Unit tests for Ant-style directory scanning."""

from __future__ import annotations

from pathlib import Path

import pytest

from classcopy_core.compiler.scanner import match_path, scan_directory


class TestMatchPath:
    """Tests for match_path()."""

    @pytest.mark.parametrize(
        ("pattern", "path"),
        [
            ("**/*.class", "B.class"),
            ("**/*.class", "a/b/B.class"),
            ("**/**", "Main.java"),
            ("**/**", "a/b/Main.java"),
            ("a/**", "a/b/Main.java"),
            ("a/", "a/Main.java"),
            ("a/?.java", "a/B.java"),
            ("**/gen/**", "x/gen/y/Z.java"),
        ],
    )
    def test_matches(self, pattern: str, path: str) -> None:
        assert match_path(pattern, path)

    @pytest.mark.parametrize(
        ("pattern", "path"),
        [
            ("**/*.class", "a/B.java"),
            ("*.java", "a/Main.java"),
            ("a/?.java", "a/Main.java"),
            ("a/**", "b/Main.java"),
            ("**/gen/**", "x/generated/Z.java"),
        ],
    )
    def test_does_not_match(self, pattern: str, path: str) -> None:
        assert not match_path(pattern, path)

    def test_backslash_separators_in_pattern(self) -> None:
        """Windows-style separators in patterns are normalized."""
        assert match_path("a\\**\\*.java", "a/b/Main.java")

    def test_regex_characters_are_literal(self) -> None:
        assert match_path("a+b/(x).java", "a+b/(x).java")
        assert not match_path("a.b/*.java", "aXb/Main.java")


class TestScanDirectory:
    """Tests for scan_directory()."""

    @pytest.fixture
    def tree(self, tmp_path: Path) -> Path:
        for relative in ("a/B.class", "a/C.class", "a/notes.txt", "x/y/Util.class", "Top.class"):
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")
        (tmp_path / "empty").mkdir()
        return tmp_path

    def test_includes(self, tree: Path) -> None:
        result = scan_directory(tree, includes=["**/*.class"])

        assert result == ["Top.class", "a/B.class", "a/C.class", "x/y/Util.class"]

    def test_default_includes_everything(self, tree: Path) -> None:
        result = scan_directory(tree)

        assert "a/notes.txt" in result
        assert len(result) == 5

    def test_empty_includes_means_everything(self, tree: Path) -> None:
        assert scan_directory(tree, includes=[]) == scan_directory(tree)

    def test_excludes(self, tree: Path) -> None:
        result = scan_directory(tree, includes=["**/*.class"], excludes=["x/**"])

        assert result == ["Top.class", "a/B.class", "a/C.class"]

    def test_directories_are_not_listed(self, tree: Path) -> None:
        assert "empty" not in scan_directory(tree)

    def test_result_is_sorted(self, tree: Path) -> None:
        result = scan_directory(tree)

        assert result == sorted(result)

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            scan_directory(tmp_path / "missing")
