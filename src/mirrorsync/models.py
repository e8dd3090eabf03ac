"""
Pydantic models for sync pairs and their outcomes.

A SyncPairSpec is read once from configuration and never mutated.
PairResult and RunReport describe what a run actually did, so callers
never have to infer it from control flow.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SyncPairSpec(BaseModel):
    """One configured (source, target) directory pair."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    source_root: Path = Field(alias="originalPath")
    target_root: Path = Field(alias="targetPath")


class EntryKind(str, Enum):
    """Kind of node produced by a tree walk."""

    FILE = "file"
    DIRECTORY = "directory"


class PairStatus(str, Enum):
    """Outcome of synchronizing one pair."""

    SUCCESS = "success"
    PARTIAL = "partial"
    ABORTED = "aborted"


class HaltPolicy(str, Enum):
    """What a run does after a pair aborts.

    CONTINUE moves on to the next pair. HALT_ON_DIRECTORY_ERROR stops
    the run when a pair's target root could not be created.
    """

    CONTINUE = "continue"
    HALT_ON_DIRECTORY_ERROR = "halt-on-directory-error"


class PairResult(BaseModel):
    """What happened to a single pair.

    Attributes:
        name: Display label of the pair.
        status: Overall outcome.
        copied: Relative paths copied (or planned, on a dry run).
        unchanged: Number of source files already identical in target.
        failed: Relative path -> error message for copies that failed.
        directories_created: Directories created while mirroring.
        error: Abort reason, when status is ABORTED.
        error_kind: "directory" or "fingerprint" for aborted pairs.
        root_failed: True when the abort happened creating the target root.
        dry_run: Whether filesystem changes were suppressed.
    """

    name: str
    status: PairStatus = PairStatus.SUCCESS
    copied: list[str] = Field(default_factory=list)
    unchanged: int = 0
    failed: dict[str, str] = Field(default_factory=dict)
    directories_created: int = 0
    error: Optional[str] = None
    error_kind: Optional[str] = None
    root_failed: bool = False
    dry_run: bool = False


class RunReport(BaseModel):
    """Ordered per-pair results for one run."""

    results: list[PairResult] = Field(default_factory=list)
    halted: bool = False
    skipped: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.halted and all(
            r.status == PairStatus.SUCCESS for r in self.results
        )

    @property
    def total_copied(self) -> int:
        return sum(len(r.copied) for r in self.results)

    @property
    def total_failed(self) -> int:
        return sum(len(r.failed) for r in self.results)
