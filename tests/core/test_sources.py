"""Tests for source normalization and markdown discovery."""

import pytest

from chatppc.core.ingestion.sources import find_markdown_files, normalize_source


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("docs/a.md", "docs/a.md"),
        ("  docs/a.md  ", "docs/a.md"),
        ("docs\\sub\\a.md", "docs/sub/a.md"),
        ("docs//sub///a.md", "docs/sub/a.md"),
    ],
)
def test_normalize_source(raw, expected):
    assert normalize_source(raw) == expected


def test_find_markdown_files_is_sorted_and_non_recursive(temp_dir):
    (temp_dir / "b.md").write_text("b", encoding="utf-8")
    (temp_dir / "a.md").write_text("a", encoding="utf-8")
    (temp_dir / "notes.txt").write_text("x", encoding="utf-8")
    nested = temp_dir / "nested"
    nested.mkdir()
    (nested / "c.md").write_text("c", encoding="utf-8")

    files = find_markdown_files(temp_dir)

    base = temp_dir.as_posix()
    assert files == [f"{base}/a.md", f"{base}/b.md"]


def test_find_markdown_files_empty_directory(temp_dir):
    assert find_markdown_files(temp_dir) == []


def test_find_markdown_files_missing_directory_raises(temp_dir):
    with pytest.raises(OSError):
        find_markdown_files(temp_dir / "does-not-exist")
