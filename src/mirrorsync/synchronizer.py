"""
Tree synchronizer -- bring one target tree up to date with its source.

    ensure target root -> fingerprint source -> fingerprint target
        -> mirror directory skeleton -> copy missing/changed files

The source fingerprint map is authoritative. The target map is only
read, so files that exist only in the target are never touched.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Optional

from .errors import CopyError, DirectoryCreateError, FingerprintError
from .fingerprint import DEFAULT_ALGORITHM, check_algorithm, fingerprint_tree
from .models import PairResult, PairStatus, SyncPairSpec
from .walker import iter_directories

logger = logging.getLogger("mirrorsync.synchronizer")

Reporter = Callable[[str], None]


def _silent(message: str) -> None:
    pass


def plan_copies(source: dict[str, str], target: dict[str, str]) -> list[str]:
    """Return the source paths whose hash is missing or different in target.

    Args:
        source: Source fingerprint map.
        target: Target fingerprint map.

    Returns:
        list[str]: Relative paths to copy, sorted.
    """
    return sorted(
        rel for rel, digest in source.items() if target.get(rel) != digest
    )


def ensure_directory(path: Path) -> bool:
    """Create a directory and its missing ancestors.

    Returns:
        bool: True if the directory was created, False if it existed.

    Raises:
        DirectoryCreateError: If the path cannot be a directory.
    """
    if path.is_dir():
        return False
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(f"Cannot create directory {path}: {exc}", path=path) from exc
    return True


def copy_file(src: Path, dst: Path) -> int:
    """Overwrite dst with the bytes of src.

    A symlink at dst is replaced by a regular file; the link's target
    outside the tree is never written.

    Returns:
        int: Number of bytes copied.

    Raises:
        CopyError: If either side cannot be opened, read or written.
    """
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        if dst.is_symlink():
            dst.unlink()
        with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
            shutil.copyfileobj(fsrc, fdst)
            return fdst.tell()
    except OSError as exc:
        raise CopyError(f"Cannot copy {src} -> {dst}: {exc}", path=src) from exc


class TreeSynchronizer:
    """Synchronizes one SyncPairSpec at a time.

    Holds no state between pairs; every call to sync() fingerprints
    both trees from scratch.
    """

    def __init__(
        self,
        reporter: Optional[Reporter] = None,
        algorithm: str = DEFAULT_ALGORITHM,
        workers: int = 1,
        dry_run: bool = False,
    ):
        """Initialize the synchronizer.

        Args:
            reporter: Sink for human-readable status lines.
            algorithm: hashlib algorithm used for fingerprints.
            workers: Hashing threads per tree.
            dry_run: Plan only, make no filesystem changes.
        """
        self._report = reporter or _silent
        self.algorithm = check_algorithm(algorithm)
        self.workers = max(1, workers)
        self.dry_run = dry_run

    def sync(self, pair: SyncPairSpec) -> PairResult:
        """Run the full sequence for one pair.

        Args:
            pair: The pair to synchronize.

        Returns:
            PairResult: Never raises for filesystem failures; aborts and
                per-file errors are recorded on the result.
        """
        result = PairResult(name=pair.name, dry_run=self.dry_run)
        source, target = pair.source_root, pair.target_root
        logger.info("Syncing %s: %s -> %s", pair.name, source, target)

        if not self.dry_run:
            try:
                ensure_directory(target)
            except DirectoryCreateError as exc:
                self._report(f"[ERROR] {exc}")
                logger.error("Pair %s aborted: %s", pair.name, exc)
                return self._abort(result, exc, "directory", root_failed=True)

        try:
            source_map = fingerprint_tree(source, self.algorithm, self.workers)
        except FingerprintError as exc:
            self._report(f"[ERROR] Fingerprinting source failed: {exc}")
            logger.warning("Pair %s aborted: %s", pair.name, exc)
            return self._abort(result, exc, "fingerprint")

        try:
            if self.dry_run and not target.exists():
                target_map: dict[str, str] = {}
            else:
                target_map = fingerprint_tree(target, self.algorithm, self.workers)
        except FingerprintError as exc:
            self._report(f"[ERROR] Fingerprinting target failed: {exc}")
            logger.warning("Pair %s aborted: %s", pair.name, exc)
            return self._abort(result, exc, "fingerprint")

        if not self.dry_run:
            try:
                result.directories_created = self.mirror_skeleton(source, target)
            except (DirectoryCreateError, FingerprintError) as exc:
                self._report(f"[ERROR] Mirroring directories failed: {exc}")
                logger.error("Pair %s aborted: %s", pair.name, exc)
                kind = "directory" if isinstance(exc, DirectoryCreateError) else "fingerprint"
                return self._abort(result, exc, kind)

        to_copy = plan_copies(source_map, target_map)
        result.unchanged = len(source_map) - len(to_copy)

        for rel in to_copy:
            self._report(f"File {rel} differs, copy required")
            if self.dry_run:
                result.copied.append(rel)
                continue

            src = source.joinpath(*rel.split("/"))
            dst = target.joinpath(*rel.split("/"))
            try:
                size = copy_file(src, dst)
            except CopyError as exc:
                result.failed[rel] = str(exc)
                self._report(f"[ERROR] Copy failed: {exc}")
                logger.warning("Copy failed for %s: %s", rel, exc)
                continue

            result.copied.append(rel)
            self._report(f"  {src} -> {dst}")
            logger.debug("Copied %s (%d bytes)", rel, size)

        if result.failed:
            result.status = PairStatus.PARTIAL

        logger.info(
            "Pair %s done: copied=%d, unchanged=%d, failed=%d",
            pair.name, len(result.copied), result.unchanged, len(result.failed),
        )
        return result

    def mirror_skeleton(self, source: Path, target: Path) -> int:
        """Create every source directory under target.

        Runs over the whole source tree, whether or not any file below
        a directory needs copying.

        Returns:
            int: Number of directories created.

        Raises:
            DirectoryCreateError: If a directory cannot be created.
            FingerprintError: If the source walk fails.
        """
        created = 0
        try:
            for entry in iter_directories(source):
                if ensure_directory(entry.under(target)):
                    created += 1
        except OSError as exc:
            raise FingerprintError(f"Cannot walk {source}: {exc}", path=source) from exc
        return created

    @staticmethod
    def _abort(
        result: PairResult,
        exc: Exception,
        kind: str,
        root_failed: bool = False,
    ) -> PairResult:
        result.status = PairStatus.ABORTED
        result.error = str(exc)
        result.error_kind = kind
        result.root_failed = root_failed
        return result
