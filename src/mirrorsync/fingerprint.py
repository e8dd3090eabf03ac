"""
Tree fingerprinting -- map every regular file of a tree to its content hash.

The map is the unit the synchronizer diffs. It is rebuilt on every run
and never cached, and it is all-or-nothing: a single unreadable file
or directory fails the whole tree.
"""

from __future__ import annotations

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .errors import FingerprintError
from .walker import TreeEntry, iter_files

logger = logging.getLogger("mirrorsync.fingerprint")

DEFAULT_ALGORITHM = "md5"
CHUNK_SIZE = 65536


def check_algorithm(algorithm: str) -> str:
    """Validate a hashlib algorithm name.

    Args:
        algorithm: Name such as "md5" or "sha256".

    Returns:
        str: The normalized (lower-case) name.

    Raises:
        ValueError: If hashlib does not guarantee the algorithm.
    """
    name = algorithm.lower()
    if name not in hashlib.algorithms_guaranteed:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")
    if name.startswith("shake_"):
        raise ValueError(f"Variable-length digest not supported: {algorithm}")
    return name


def hash_file(path: Path, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Compute the hex digest of a file, streaming it in chunks.

    Args:
        path: File to hash.
        algorithm: hashlib algorithm name.

    Returns:
        str: Hex digest.
    """
    h = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def fingerprint_tree(
    root: Path,
    algorithm: str = DEFAULT_ALGORITHM,
    workers: int = 1,
) -> dict[str, str]:
    """Build the fingerprint map of a directory tree.

    Args:
        root: Tree root. Must be an existing directory.
        algorithm: hashlib algorithm name.
        workers: Threads used for hashing. 1 hashes sequentially.

    Returns:
        dict[str, str]: '/'-separated relative path -> hex digest.

    Raises:
        FingerprintError: If the root is missing, the walk fails, or any
            file cannot be read. No partial map is returned.
    """
    root = Path(root)
    algorithm = check_algorithm(algorithm)
    if not root.is_dir():
        raise FingerprintError(f"Not a directory: {root}", path=root)

    try:
        entries = list(iter_files(root))
    except OSError as exc:
        raise FingerprintError(f"Cannot walk {root}: {exc}", path=root) from exc

    def _hash(entry: TreeEntry) -> tuple[str, str]:
        path = entry.under(root)
        try:
            return entry.key, hash_file(path, algorithm)
        except OSError as exc:
            raise FingerprintError(f"Cannot hash {path}: {exc}", path=path) from exc

    if workers > 1 and len(entries) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            fingerprints = dict(pool.map(_hash, entries))
    else:
        fingerprints = dict(_hash(e) for e in entries)

    logger.debug("Fingerprinted %d file(s) under %s", len(fingerprints), root)
    return fingerprints
