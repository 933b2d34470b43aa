"""
Documentation Agent services package.

- ChangeOrchestrator: Turns code changes into doc commits or review PRs
- GapSimulator: Staged gap "analysis" over the predetermined findings
- GapFixApplicator: Opens a PR applying selected gap fixes
- DemoController: Scripted trigger and reset for the live demo
- ReviewStore / InMemoryReviewStore: Registry of proposed changes
"""

from app.services.docs.demo import DemoController
from app.services.docs.gap_fixer import GapFixApplicator, NoValidGapsError
from app.services.docs.gap_simulator import GapSimulator
from app.services.docs.gaps import apply_gap_fix, build_analysis_result, select_gaps
from app.services.docs.orchestrator import ChangeOrchestrator
from app.services.docs.review_store import (
    InMemoryReviewStore,
    ReviewNotFoundError,
    ReviewStateError,
    ReviewStore,
)
from app.services.docs.types import (
    AccessLevel,
    FileChange,
    GapFixResult,
    Review,
    ReviewStatus,
)

__all__ = [
    # Services
    "ChangeOrchestrator",
    "DemoController",
    "GapFixApplicator",
    "GapSimulator",
    # Storage
    "InMemoryReviewStore",
    "ReviewStore",
    # Errors
    "NoValidGapsError",
    "ReviewNotFoundError",
    "ReviewStateError",
    # Gap helpers
    "apply_gap_fix",
    "build_analysis_result",
    "select_gaps",
    # Types
    "AccessLevel",
    "FileChange",
    "GapFixResult",
    "Review",
    "ReviewStatus",
]
