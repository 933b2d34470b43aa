"""
Gap selection, fix application, and result building.

This is the "result" half of gap analysis. The progress theater lives in
gap_simulator.py; swapping in a real detector only means replacing
`build_analysis_result`.
"""

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from app.content import PREDETERMINED_GAPS
from app.schemas.gaps import GAP_TYPES, SEVERITIES, AnalysisResult, DocGap, GapSummary


def apply_gap_fix(gap: DocGap, content: str) -> str:
    """Replace the first occurrence of the gap's `before` text with its `after`.

    Returns the content unchanged when `before` isn't present. Compare the
    result with the input to detect a failed match.
    """
    return content.replace(gap.suggested_fix.before, gap.suggested_fix.after, 1)


def select_gaps(gap_ids: Iterable[str], gaps: Sequence[DocGap] = PREDETERMINED_GAPS) -> list[DocGap]:
    """Return known gaps whose id was requested, in catalogue order.

    Unknown ids are dropped.
    """
    wanted = set(gap_ids)
    return [gap for gap in gaps if gap.id in wanted]


def group_by_file(gaps: Iterable[DocGap]) -> dict[str, list[DocGap]]:
    """Group gaps by the file their fix targets, keeping first-seen order."""
    grouped: dict[str, list[DocGap]] = {}
    for gap in gaps:
        grouped.setdefault(gap.suggested_fix.file, []).append(gap)
    return grouped


def summarize_gaps(gaps: Sequence[DocGap]) -> GapSummary:
    """Count gaps in total, per severity, and per type (zeros included)."""
    return GapSummary(
        total=len(gaps),
        by_severity={severity: sum(1 for g in gaps if g.severity == severity) for severity in SEVERITIES},
        by_type={gap_type: sum(1 for g in gaps if g.gap_type == gap_type) for gap_type in GAP_TYPES},
    )


def build_analysis_result(gaps: Sequence[DocGap] = PREDETERMINED_GAPS) -> AnalysisResult:
    """Package the gap list with its summary and a completion timestamp."""
    return AnalysisResult(
        gaps=list(gaps),
        timestamp=datetime.now(UTC).isoformat(),
        summary=summarize_gaps(gaps),
    )
