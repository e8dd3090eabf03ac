"""Tests for the tree walker."""

from __future__ import annotations

import os
import socket
from pathlib import Path, PurePosixPath

import pytest

from mirrorsync.models import EntryKind
from mirrorsync.walker import TreeEntry, iter_directories, iter_files, walk_tree

from conftest import write_tree


class TestWalkTree:
    """Tests for walk_tree and its filters."""

    def test_root_is_first_entry(self, source: Path):
        """The root is yielded as a directory with an empty relative path."""
        entries = list(walk_tree(source))
        assert entries == [TreeEntry(PurePosixPath(), EntryKind.DIRECTORY)]

    def test_yields_files_and_directories(self, source: Path):
        """Nested files and directories are listed with relative paths."""
        write_tree(source, {"a.txt": "X", "sub/b.txt": "Y", "sub/deep/c.txt": "Z"})
        (source / "empty").mkdir()

        files = {e.key for e in iter_files(source)}
        dirs = {e.key for e in iter_directories(source)}

        assert files == {"a.txt", "sub/b.txt", "sub/deep/c.txt"}
        assert dirs == {".", "sub", "sub/deep", "empty"}

    def test_directory_precedes_its_contents(self, source: Path):
        """A directory entry appears before anything inside it."""
        write_tree(source, {"sub/b.txt": "Y"})
        keys = [e.key for e in walk_tree(source)]
        assert keys.index("sub") < keys.index("sub/b.txt")

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinks_are_skipped(self, source: Path, tmp_path: Path):
        """Symlinks to files and directories are neither yielded nor followed."""
        outside = write_tree(tmp_path / "outside", {"secret.txt": "S"})
        write_tree(source, {"real.txt": "R"})
        (source / "link.txt").symlink_to(outside / "secret.txt")
        (source / "linkdir").symlink_to(outside, target_is_directory=True)

        keys = {e.key for e in walk_tree(source)}
        assert "real.txt" in keys
        assert "link.txt" not in keys
        assert "linkdir" not in keys
        assert not any("secret" in k for k in keys)

    @pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="unix sockets unavailable")
    def test_special_files_are_skipped(self, tmp_path: Path):
        """Sockets are not reported as files."""
        root = tmp_path / "s"
        root.mkdir()
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.bind(str(root / "sock"))
            assert [e.key for e in iter_files(root)] == []
        finally:
            sock.close()

    def test_missing_root_raises(self, tmp_path: Path):
        """Walking a missing directory propagates the OSError."""
        with pytest.raises(OSError):
            list(walk_tree(tmp_path / "nope"))

    def test_under_resolves_in_another_root(self, source: Path, tmp_path: Path):
        """An entry maps onto the same relative location in another tree."""
        write_tree(source, {"sub/b.txt": "Y"})
        entry = next(e for e in iter_files(source))
        assert entry.under(tmp_path / "other") == tmp_path / "other" / "sub" / "b.txt"
