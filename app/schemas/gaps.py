"""Pydantic schemas for documentation gap findings and analysis results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

GapType = Literal["STALENESS", "UNDOCUMENTED", "OBSOLETE"]
Severity = Literal["critical", "high", "medium", "low"]

GAP_TYPES: tuple[GapType, ...] = ("STALENESS", "UNDOCUMENTED", "OBSOLETE")
SEVERITIES: tuple[Severity, ...] = ("critical", "high", "medium", "low")


class SuggestedFix(BaseModel):
    """Literal text replacement that resolves a gap."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(description="Documentation file the replacement applies to")
    before: str = Field(description="Exact text span expected in the current file")
    after: str = Field(description="Replacement text")


class DocGap(BaseModel):
    """A predetermined mismatch between documentation and code."""

    model_config = ConfigDict(frozen=True)

    id: str
    gap_type: GapType
    severity: Severity
    doc_file: str
    description: str
    evidence: str | None = None
    suggested_fix: SuggestedFix


class GapSummary(BaseModel):
    """Gap counts for the analysis result."""

    total: int
    by_severity: dict[str, int]
    by_type: dict[str, int]


class AnalysisResult(BaseModel):
    """Final payload of a gap analysis run."""

    gaps: list[DocGap]
    timestamp: str
    summary: GapSummary


class FixGapsRequest(BaseModel):
    """Request to open a PR resolving the selected gaps."""

    model_config = ConfigDict(populate_by_name=True)

    gap_ids: list[str] = Field(default_factory=list, alias="gapIds")


class FixGapsResponse(BaseModel):
    """Outcome of a gap fix batch."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    pr_number: int = Field(alias="prNumber")
    pr_url: str = Field(alias="prUrl")
    fixed_gaps: int = Field(alias="fixedGaps")
    files_updated: int = Field(alias="filesUpdated")
