"""Health check endpoint."""

import time
from fastapi import APIRouter, Request

from formguard.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Service health; degraded until a ruleset is loaded."""
    engine = request.app.state.engine
    ruleset = engine.ruleset

    return HealthResponse(
        status="healthy" if ruleset is not None else "degraded",
        uptime_seconds=round(time.time() - _start_time, 2),
        ruleset_loaded=ruleset is not None,
        ruleset_fields=len(ruleset) if ruleset is not None else 0,
        remote_methods=len(engine.catalog.remote_names()),
    )
