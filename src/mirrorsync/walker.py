"""
Tree walking -- a pure, lazy listing of a directory tree.

The walker knows nothing about hashing or copying. It yields one
TreeEntry per directory and regular file, keyed by a structured
relative path, and leaves every decision to the consumer.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterator

from .models import EntryKind


@dataclass(frozen=True)
class TreeEntry:
    """A node found under a tree root.

    Attributes:
        relative: Path relative to the root. Empty for the root itself.
        kind: FILE or DIRECTORY.
    """

    relative: PurePosixPath
    kind: EntryKind

    @property
    def key(self) -> str:
        """Canonical '/'-separated key used in fingerprint maps."""
        return self.relative.as_posix()

    def under(self, root: Path) -> Path:
        """Resolve this entry beneath another tree root."""
        return root.joinpath(*self.relative.parts)


def walk_tree(root: Path) -> Iterator[TreeEntry]:
    """Yield the root and every directory and regular file below it.

    Symlinks are neither yielded nor followed, and sockets, FIFOs and
    device nodes are skipped. Errors listing a directory propagate
    as OSError.

    Args:
        root: Directory to walk.

    Yields:
        TreeEntry: Depth-first, root first.
    """
    yield TreeEntry(PurePosixPath(), EntryKind.DIRECTORY)
    yield from _walk(Path(root), PurePosixPath())


def _walk(directory: Path, prefix: PurePosixPath) -> Iterator[TreeEntry]:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        if entry.is_symlink():
            continue
        relative = prefix / entry.name
        if entry.is_dir(follow_symlinks=False):
            yield TreeEntry(relative, EntryKind.DIRECTORY)
            yield from _walk(Path(entry.path), relative)
        elif entry.is_file(follow_symlinks=False):
            yield TreeEntry(relative, EntryKind.FILE)


def iter_files(root: Path) -> Iterator[TreeEntry]:
    """Yield only the regular files of a tree."""
    return (e for e in walk_tree(root) if e.kind == EntryKind.FILE)


def iter_directories(root: Path) -> Iterator[TreeEntry]:
    """Yield only the directories of a tree, root included."""
    return (e for e in walk_tree(root) if e.kind == EntryKind.DIRECTORY)
