"""
Gap analysis endpoints.

- GET /analyze: one fixed delay, then the full result
- GET /analyze/stream: Server-Sent Events replaying the staged analysis
- POST /fix-gaps: open a PR applying the suggested fixes for selected gaps
"""

import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api.deps import Services, require_admin
from app.core.exceptions import UpstreamError, ValidationError
from app.schemas.gaps import AnalysisResult, FixGapsRequest, FixGapsResponse
from app.services.docs import GapSimulator, NoValidGapsError
from app.services.github import GitHubAPIError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"], dependencies=[Depends(require_admin)])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_sse(event: str, data: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


async def _sse_stream(simulator: GapSimulator) -> AsyncGenerator[str, None]:
    async for event, data in simulator.stream():
        yield format_sse(event, data)


@router.get("/analyze", response_model=AnalysisResult)
async def analyze(services: Services) -> AnalysisResult:
    return await services.simulator.analyze()


@router.get("/analyze/stream")
async def analyze_stream(services: Services) -> StreamingResponse:
    """Stream progress, log, result and done events as text/event-stream."""
    return StreamingResponse(
        _sse_stream(services.simulator),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/fix-gaps", response_model=FixGapsResponse)
async def fix_gaps(body: FixGapsRequest, services: Services) -> FixGapsResponse:
    """
    Apply the suggested fixes for the requested gaps in one pull request.

    Unknown ids are ignored; if none remain, nothing is created on GitHub.
    """
    if not body.gap_ids:
        raise ValidationError("gapIds array required")

    try:
        result = await services.gap_fixer.fix(body.gap_ids)
    except NoValidGapsError as e:
        raise ValidationError(str(e)) from None
    except GitHubAPIError as e:
        raise UpstreamError(e.message) from e

    return FixGapsResponse(
        pr_number=result.pr_number,
        pr_url=result.pr_url,
        fixed_gaps=result.fixed_gaps,
        files_updated=result.files_updated,
    )
