"""
Run loop -- process configured pairs in order under an explicit halt policy.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .models import HaltPolicy, PairStatus, RunReport, SyncPairSpec
from .synchronizer import Reporter, TreeSynchronizer

logger = logging.getLogger("mirrorsync.runner")


def run_pairs(
    pairs: Iterable[SyncPairSpec],
    synchronizer: Optional[TreeSynchronizer] = None,
    policy: HaltPolicy = HaltPolicy.CONTINUE,
    reporter: Optional[Reporter] = None,
) -> RunReport:
    """Synchronize each pair to completion before starting the next.

    Args:
        pairs: Pairs in configured order.
        synchronizer: Synchronizer to use. Defaults to a sequential one.
        policy: Whether a target-root failure stops the remaining pairs.
        reporter: Sink for per-pair summary lines.

    Returns:
        RunReport: One PairResult per processed pair, plus skipped names.
    """
    sync = synchronizer or TreeSynchronizer(reporter=reporter)
    report_line = reporter or (lambda message: None)
    report = RunReport()

    pending = list(pairs)
    for index, pair in enumerate(pending):
        result = sync.sync(pair)
        report.results.append(result)

        if result.status != PairStatus.ABORTED:
            report_line(
                f"Name: {pair.name}, OriginalPath: {pair.source_root}, "
                f"TargetPath: {pair.target_root}"
            )
            continue

        if policy == HaltPolicy.HALT_ON_DIRECTORY_ERROR and result.root_failed:
            report.halted = True
            report.skipped = [p.name for p in pending[index + 1:]]
            logger.error(
                "Run halted at pair %s; %d pair(s) skipped",
                pair.name, len(report.skipped),
            )
            break

    logger.info(
        "Run finished: %d pair(s), %d copied, %d failed",
        len(report.results), report.total_copied, report.total_failed,
    )
    return report
