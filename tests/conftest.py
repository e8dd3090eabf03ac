"""Shared test fixtures for mirrorsync."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from mirrorsync.models import SyncPairSpec


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (relative path -> text content) under root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


def md5_of(path: Path) -> str:
    return hashlib.md5(path.read_bytes()).hexdigest()


@pytest.fixture
def source(tmp_path: Path) -> Path:
    """Provide an empty source directory."""
    src = tmp_path / "source"
    src.mkdir()
    return src


@pytest.fixture
def target(tmp_path: Path) -> Path:
    """Provide a target path that does not exist yet."""
    return tmp_path / "target"


@pytest.fixture
def pair(source: Path, target: Path) -> SyncPairSpec:
    """Provide a pair spec over the source and target fixtures."""
    return SyncPairSpec(name="docs", source_root=source, target_root=target)
