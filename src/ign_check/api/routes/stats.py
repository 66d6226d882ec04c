from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ign_check.api.deps import get_session
from ign_check.api.responses import ok
from ign_check.db.repos.lookup_check_repo import (
    DEFAULT_PERIOD,
    PERIODS,
    LookupCheckRepository,
    period_start,
)

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("")
def get_stats(
    request: Request,
    period: str = Query(DEFAULT_PERIOD, description="One of 1h, 24h, 7d, 30d."),
    session: Session = Depends(get_session),
) -> JSONResponse:
    if period not in PERIODS:
        period = DEFAULT_PERIOD

    stats = LookupCheckRepository(session).stats_since(period_start(period))
    data = asdict(stats)
    data["period"] = period
    return ok(data, request=request, message="Statistics retrieved successfully")
