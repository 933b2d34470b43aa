"""
GapSimulator - Replays a staged "analysis" ahead of the static gap list.

The four phases, their percentages, and the delays between log lines are
presentational only. No work happens between the sleeps; the result always
comes from `build_analysis_result`.

Phases:
1. Profiling documentation   0-15%
2. Building code inventory  15-35%
3. Matching features        35-60%
4. Detecting gaps           60-100%
"""

import asyncio
import logging
import math
from collections.abc import AsyncIterator, Sequence
from typing import Any

from app.content import PREDETERMINED_GAPS
from app.schemas.gaps import AnalysisResult, DocGap
from app.services.docs.gaps import build_analysis_result
from app.services.events import EventBroadcaster, EventType

logger = logging.getLogger(__name__)

TOTAL_STEPS = 4

# Phase number -> (start %, end %)
PHASE_RANGES: dict[int, tuple[int, int]] = {
    1: (0, 15),
    2: (15, 35),
    3: (35, 60),
    4: (60, 100),
}

PHASE_PROFILING = "Profiling documentation"
PHASE_INVENTORY = "Building code inventory"
PHASE_MATCHING = "Matching features"
PHASE_DETECTING = "Detecting gaps"

SCANNED_DOC_FILES = ("docs/getting-started.md", "docs/architecture.md", "docs/how-to-guide.md")
PARSED_CODE_FILES = (
    "src/routes/users.ts",
    "src/routes/products.ts",
    "src/routes/orders.ts",
    "src/middleware/auth.ts",
    "src/middleware/rateLimit.ts",
    "src/index.ts",
    "src/config.ts",
)
DOC_FEATURES = ("API endpoints", "Rate limiting", "Authentication", "Error handling", "User management")
CODE_FEATURE_COUNT = 12
CODE_ENTITY_COUNT = 8
MATCHED_FEATURES = 7
UNMATCHED_DOC_FEATURES = 2
UNMATCHED_CODE_FEATURES = 5

NON_STREAMING_DELAY = 1.5

# (gap type, log line, progress detail, found prefix, sub start, sub span, scan delay, per-gap delay)
DETECTION_PASSES: tuple[tuple[str, str, str, str, float, float, float, float], ...] = (
    ("STALENESS", "Checking for stale documentation...", "Analyzing staleness patterns...",
     "Found staleness in", 0.1, 0.2, 1.5, 0.7),
    ("UNDOCUMENTED", "Checking for undocumented features...", "Scanning for undocumented code...",
     "Found undocumented feature in", 0.35, 0.3, 1.8, 0.8),
    ("OBSOLETE", "Checking for obsolete documentation...", "Identifying obsolete references...",
     "Found obsolete content in", 0.7, 0.25, 1.2, 0.6),
)

StreamEvent = tuple[str, dict[str, Any]]


def phase_percent(step: int, sub: float = 0.0) -> int:
    """Map sub-progress within a phase onto the overall 0-100 scale (half-up)."""
    start, end = PHASE_RANGES.get(step, (0, 100))
    return math.floor(start + (end - start) * sub + 0.5)


def progress_event(step: int, step_name: str, detail: str, sub: float = 0.5) -> StreamEvent:
    return (
        "progress",
        {
            "step": step,
            "totalSteps": TOTAL_STEPS,
            "stepName": step_name,
            "detail": detail,
            "percent": phase_percent(step, sub),
        },
    )


def log_event(message: str) -> StreamEvent:
    return ("log", {"message": message})


class GapSimulator:
    """Produces the analysis result, optionally preceded by staged progress."""

    def __init__(
        self,
        broadcaster: EventBroadcaster,
        delay_scale: float = 1.0,
        gaps: Sequence[DocGap] = PREDETERMINED_GAPS,
    ) -> None:
        self.broadcaster = broadcaster
        self.delay_scale = delay_scale
        self.gaps = gaps

    async def _pause(self, seconds: float) -> None:
        if self.delay_scale > 0:
            await asyncio.sleep(seconds * self.delay_scale)

    async def analyze(self) -> AnalysisResult:
        """Non-streaming variant: one fixed delay, then the result."""
        await self.broadcaster.broadcast(EventType.ANALYSIS_STARTED)
        await self._pause(NON_STREAMING_DELAY)

        result = build_analysis_result(self.gaps)
        await self.broadcaster.broadcast(EventType.ANALYSIS_COMPLETE, {"gapCount": len(self.gaps)})
        return result

    async def stream(self) -> AsyncIterator[StreamEvent]:
        """
        Streaming variant: yields (event name, payload) pairs.

        Event names are "progress", "log", "result", "done", and "error" if
        the run fails part-way.
        """
        await self.broadcaster.broadcast(EventType.ANALYSIS_STARTED)

        try:
            async for event in self._run_phases():
                yield event

            result = build_analysis_result(self.gaps)
            yield ("result", result.model_dump(mode="json"))
            yield ("done", {"success": True})
        except Exception as e:
            logger.exception("Gap analysis stream failed")
            yield ("error", {"message": str(e)})
            return

        await self.broadcaster.broadcast(EventType.ANALYSIS_COMPLETE, {"gapCount": len(self.gaps)})

    async def _run_phases(self) -> AsyncIterator[StreamEvent]:
        # Phase 1: Profiling documentation
        step = 1
        yield progress_event(step, PHASE_PROFILING, "Scanning doc files...", 0)
        yield log_event("Phase 1: Profiling documentation...")
        await self._pause(0.3)

        for i, path in enumerate(SCANNED_DOC_FILES):
            yield log_event(f"  Scanning {path}")
            yield progress_event(
                step, PHASE_PROFILING, f"Scanning {path}", (i + 1) / len(SCANNED_DOC_FILES) * 0.6
            )
            await self._pause(0.2)

        yield log_event(f"  Found {len(SCANNED_DOC_FILES)} doc files")
        await self._pause(0.15)

        yield progress_event(step, PHASE_PROFILING, "Extracting features from docs...", 0.8)
        yield log_event("  Extracting features from documentation...")
        await self._pause(0.4)

        yield log_event(f"  Extracted {len(DOC_FEATURES)} documented features")
        yield progress_event(step, PHASE_PROFILING, "Done", 1)
        await self._pause(0.2)

        # Phase 2: Building code inventory
        step = 2
        yield progress_event(step, PHASE_INVENTORY, "Scanning source files...", 0)
        yield log_event("\nPhase 2: Building code inventory...")
        await self._pause(0.35)

        for i, path in enumerate(PARSED_CODE_FILES):
            yield log_event(f"  Parsing {path}")
            yield progress_event(
                step, PHASE_INVENTORY, f"Parsing {path}", (i + 1) / len(PARSED_CODE_FILES) * 0.7
            )
            await self._pause(0.18)

        yield log_event(f"  Found {len(PARSED_CODE_FILES)} source files")
        await self._pause(0.15)

        yield progress_event(step, PHASE_INVENTORY, "Extracting code features...", 0.85)
        yield log_event("  Extracting code features and entities...")
        await self._pause(0.5)

        yield log_event(f"  Found {CODE_FEATURE_COUNT} code features")
        yield log_event(f"  Found {CODE_ENTITY_COUNT} entities")
        yield progress_event(step, PHASE_INVENTORY, "Done", 1)
        await self._pause(0.25)

        # Phase 3: Matching features
        step = 3
        yield progress_event(step, PHASE_MATCHING, "Comparing doc features with code...", 0)
        yield log_event("\nPhase 3: Matching features...")
        await self._pause(0.8)

        for message, detail, sub, delay in (
            ("  Comparing documented features with code implementation...",
             "Running semantic comparison...", 0.2, 2.0),
            ("  Running semantic similarity analysis...", "Computing similarity scores...", 0.4, 2.5),
            ("  Building feature dependency graph...", "Building feature dependency graph...", 0.7, 1.8),
        ):
            yield log_event(message)
            yield progress_event(step, PHASE_MATCHING, detail, sub)
            await self._pause(delay)

        yield log_event(f"  Matched {MATCHED_FEATURES} features")
        yield log_event(f"  Unmatched doc features: {UNMATCHED_DOC_FEATURES}")
        yield log_event(f"  Unmatched code features: {UNMATCHED_CODE_FEATURES}")
        yield progress_event(step, PHASE_MATCHING, "Done", 1)
        await self._pause(0.5)

        # Phase 4: Detecting gaps
        step = 4
        yield progress_event(step, PHASE_DETECTING, "Initializing gap detection...", 0)
        yield log_event("\nPhase 4: Detecting gaps...")
        await self._pause(0.7)

        counts: dict[str, int] = {}
        for gap_type, check, detail, found, start, span, scan_delay, gap_delay in DETECTION_PASSES:
            yield log_event(f"  {check}")
            yield progress_event(step, PHASE_DETECTING, detail, start)
            await self._pause(scan_delay)

            matches = [gap for gap in self.gaps if gap.gap_type == gap_type]
            for i, gap in enumerate(matches):
                yield log_event(f"    [{gap_type}] {gap.doc_file}: {gap.description[:50]}...")
                yield progress_event(
                    step, PHASE_DETECTING, f"{found} {gap.doc_file}", start + (i + 1) / len(matches) * span
                )
                await self._pause(gap_delay)

            counts[gap_type] = len(matches)
            yield log_event(f"  Found {len(matches)} {gap_type.lower()} gaps")
            await self._pause(0.6 if gap_type != "OBSOLETE" else 0.5)

        # Summary
        rule = "=" * 50
        high_priority = sum(1 for gap in self.gaps if gap.severity in ("high", "critical"))
        yield progress_event(TOTAL_STEPS, "Complete", "Analysis finished", 1)
        for line in (
            f"\n{rule}",
            "ANALYSIS COMPLETE",
            rule,
            f"Doc files scanned:    {len(SCANNED_DOC_FILES)}",
            f"Code files parsed:    {len(PARSED_CODE_FILES)}",
            f"Features matched:     {MATCHED_FEATURES}",
            f"Total gaps found:     {len(self.gaps)}",
            f"  - Staleness:        {counts.get('STALENESS', 0)}",
            f"  - Undocumented:     {counts.get('UNDOCUMENTED', 0)}",
            f"  - Obsolete:         {counts.get('OBSOLETE', 0)}",
            f"High priority:        {high_priority}",
        ):
            yield log_event(line)
