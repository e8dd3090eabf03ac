"""Tests for the run loop and its halt policy."""

from __future__ import annotations

from pathlib import Path

from mirrorsync.models import HaltPolicy, PairStatus, SyncPairSpec
from mirrorsync.runner import run_pairs
from mirrorsync.synchronizer import TreeSynchronizer

from conftest import write_tree


def _pairs(tmp_path: Path) -> list[SyncPairSpec]:
    """Three pairs; the middle one's target root is blocked by a file."""
    write_tree(tmp_path / "s1", {"one.txt": "1"})
    write_tree(tmp_path / "s2", {"two.txt": "2"})
    write_tree(tmp_path / "s3", {"three.txt": "3"})
    (tmp_path / "blocked").write_text("file, not a directory")
    return [
        SyncPairSpec(name="first", source_root=tmp_path / "s1", target_root=tmp_path / "t1"),
        SyncPairSpec(name="second", source_root=tmp_path / "s2", target_root=tmp_path / "blocked"),
        SyncPairSpec(name="third", source_root=tmp_path / "s3", target_root=tmp_path / "t3"),
    ]


class TestRunPairs:
    """Tests for run_pairs."""

    def test_no_pairs(self):
        """An empty pair list yields an empty, successful report."""
        report = run_pairs([])
        assert report.results == []
        assert report.ok

    def test_processes_all_pairs(self, tmp_path: Path):
        """Every pair gets a result in configured order."""
        write_tree(tmp_path / "a", {"x.txt": "x"})
        write_tree(tmp_path / "b", {"y.txt": "y"})
        pairs = [
            SyncPairSpec(name="a", source_root=tmp_path / "a", target_root=tmp_path / "ta"),
            SyncPairSpec(name="b", source_root=tmp_path / "b", target_root=tmp_path / "tb"),
        ]

        report = run_pairs(pairs)

        assert [r.name for r in report.results] == ["a", "b"]
        assert report.ok
        assert report.total_copied == 2
        assert (tmp_path / "tb" / "y.txt").read_text() == "y"

    def test_continue_policy_skips_past_abort(self, tmp_path: Path):
        """By default a blocked target root aborts only its own pair."""
        report = run_pairs(_pairs(tmp_path))

        statuses = [r.status for r in report.results]
        assert statuses == [PairStatus.SUCCESS, PairStatus.ABORTED, PairStatus.SUCCESS]
        assert report.halted is False
        assert report.skipped == []
        assert not report.ok
        assert (tmp_path / "t3" / "three.txt").exists()

    def test_halt_policy_stops_run(self, tmp_path: Path):
        """HALT_ON_DIRECTORY_ERROR stops after a target-root failure."""
        report = run_pairs(_pairs(tmp_path), policy=HaltPolicy.HALT_ON_DIRECTORY_ERROR)

        assert [r.name for r in report.results] == ["first", "second"]
        assert report.halted is True
        assert report.skipped == ["third"]
        assert not (tmp_path / "t3").exists()

    def test_halt_policy_ignores_fingerprint_abort(self, tmp_path: Path):
        """A fingerprint failure never halts the run, whatever the policy."""
        write_tree(tmp_path / "ok", {"f.txt": "f"})
        pairs = [
            SyncPairSpec(name="ghost", source_root=tmp_path / "missing", target_root=tmp_path / "t0"),
            SyncPairSpec(name="ok", source_root=tmp_path / "ok", target_root=tmp_path / "t1"),
        ]

        report = run_pairs(pairs, policy=HaltPolicy.HALT_ON_DIRECTORY_ERROR)

        assert report.halted is False
        assert report.results[0].status == PairStatus.ABORTED
        assert report.results[1].status == PairStatus.SUCCESS

    def test_summary_line_per_completed_pair(self, tmp_path: Path):
        """Completed pairs emit a Name/OriginalPath/TargetPath line."""
        lines: list[str] = []
        run_pairs(
            _pairs(tmp_path),
            TreeSynchronizer(reporter=lines.append),
            reporter=lines.append,
        )

        summaries = [line for line in lines if line.startswith("Name: ")]
        assert len(summaries) == 2
        assert summaries[0].startswith("Name: first, OriginalPath: ")
