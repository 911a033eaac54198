"""Tests for filesystem helpers."""

from pathlib import Path

import pytest

from dotin.core.utils import are_in_the_same_filesystem, create_folder_at, dedup_nested


def test_create_folder_at_creates_ancestors(tmp_path: Path) -> None:
    """Test that missing parents are created."""
    folder = tmp_path / "a" / "b" / "c"
    create_folder_at(folder)
    assert folder.is_dir()


def test_create_folder_at_is_idempotent(tmp_path: Path) -> None:
    """Test that an existing folder is left as it is."""
    folder = tmp_path / "group"
    folder.mkdir()
    (folder / "file").write_text("content")

    create_folder_at(folder)
    create_folder_at(folder)

    assert [p.name for p in folder.iterdir()] == ["file"]
    assert (folder / "file").read_text() == "content"


def test_create_folder_at_over_file(tmp_path: Path) -> None:
    """Test that a file in the way is an error."""
    (tmp_path / "taken").write_text("")
    with pytest.raises(OSError):
        create_folder_at(tmp_path / "taken")


def test_same_filesystem(tmp_path: Path) -> None:
    """Test paths under the same temporary directory."""
    (tmp_path / "file").write_text("")
    (tmp_path / "dir").mkdir()
    assert are_in_the_same_filesystem(tmp_path / "file", tmp_path / "dir")


def test_same_filesystem_missing_path(tmp_path: Path) -> None:
    """Test that a missing path raises instead of guessing."""
    with pytest.raises(FileNotFoundError):
        are_in_the_same_filesystem(tmp_path / "missing", tmp_path)


def test_same_filesystem_uses_link_location(tmp_path: Path) -> None:
    """Test that a dangling symlink is judged by the link itself."""
    link = tmp_path / "link"
    link.symlink_to(tmp_path / "missing")
    assert are_in_the_same_filesystem(link, tmp_path)


@pytest.mark.parametrize(
    "directories, expected",
    [
        ([], []),
        (["a", "b"], ["a", "b"]),
        (["a/b", "a"], ["a/b"]),
        (["a", "a/b", "a/b/c"], ["a/b/c"]),
        (["a/b/c", "a", "d"], ["a/b/c", "d"]),
        (["a/b", "a/c", "d"], ["a/b", "a/c", "d"]),
        (["a", "a"], ["a"]),
        (["ab", "a"], ["ab", "a"]),
    ],
)
def test_dedup_nested(directories: list, expected: list) -> None:
    """Test that only the deepest directories are kept."""
    paths = [Path(d) for d in directories]
    dedup_nested(paths)
    assert paths == [Path(d) for d in expected]
