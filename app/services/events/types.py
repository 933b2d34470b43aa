"""Event types pushed to dashboard subscribers."""

from enum import Enum


class EventType(str, Enum):
    """Type tag carried in every broadcast event."""

    # Change propagation
    WEBHOOK_RECEIVED = "WEBHOOK_RECEIVED"
    ANALYZING_CHANGES = "ANALYZING_CHANGES"
    NO_UPDATES_NEEDED = "NO_UPDATES_NEEDED"
    COMMITTING = "COMMITTING"
    COMMITTED = "COMMITTED"
    DEPLOYMENT_STARTED = "DEPLOYMENT_STARTED"

    # Review lifecycle
    BRANCH_CREATED = "BRANCH_CREATED"
    PR_CREATED = "PR_CREATED"
    PR_MERGED = "PR_MERGED"
    PR_CLOSED = "PR_CLOSED"
    REVIEW_UPDATED = "REVIEW_UPDATED"

    # Demo controls
    DEMO_STARTED = "DEMO_STARTED"
    CODE_PUSHED = "CODE_PUSHED"
    RESET_STARTED = "RESET_STARTED"
    DEMO_RESET = "DEMO_RESET"
    ACCESS_LEVEL_CHANGED = "ACCESS_LEVEL_CHANGED"

    # Gap analysis
    ANALYSIS_STARTED = "ANALYSIS_STARTED"
    ANALYSIS_COMPLETE = "ANALYSIS_COMPLETE"
    FIX_STARTED = "FIX_STARTED"
    FILE_COMMITTED = "FILE_COMMITTED"
    FIX_ERROR = "FIX_ERROR"
