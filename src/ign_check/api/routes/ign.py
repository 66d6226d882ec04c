from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from ign_check.api.deps import client_ip, get_lookup_service, request_id
from ign_check.api.responses import fail, ok, result_payload, result_response
from ign_check.api.schemas import BulkCheckBody, CheckIgnBody
from ign_check.api.service import LookupService
from ign_check.lookup.providers.base.errors import InvalidLookupRequest

router = APIRouter(prefix="/api", tags=["ign"])


@router.get("/check-ign/{game_id}/{user_id}")
def check_ign_simple(
    game_id: str,
    user_id: str,
    request: Request,
    zone: str | None = Query(None, description="Zone id for games that require it (e.g. mlbb)."),
    service: LookupService = Depends(get_lookup_service),
) -> JSONResponse:
    try:
        outcome = service.check(
            game_id,
            user_id,
            zone,
            client_ip=client_ip(request),
            request_id=request_id(request),
        )
    except InvalidLookupRequest as e:
        return fail(400, "ValidationError", str(e), request=request)
    return result_response(outcome.result, outcome.profile, request=request)


@router.post("/check-ign")
def check_ign(
    body: CheckIgnBody,
    request: Request,
    service: LookupService = Depends(get_lookup_service),
) -> JSONResponse:
    try:
        outcome = service.check_params(
            body.game_id,
            body.params,
            client_ip=client_ip(request),
            request_id=request_id(request),
        )
    except InvalidLookupRequest as e:
        return fail(400, "ValidationError", str(e), request=request)
    return result_response(outcome.result, outcome.profile, request=request)


@router.post("/bulk-check")
def bulk_check(
    body: BulkCheckBody,
    request: Request,
    service: LookupService = Depends(get_lookup_service),
) -> JSONResponse:
    results: list[dict[str, Any]] = []
    for check in body.checks:
        try:
            outcome = service.check_params(
                check.game_id,
                check.params,
                client_ip=client_ip(request),
                request_id=request_id(request),
            )
        except InvalidLookupRequest as e:
            results.append(
                {
                    "gameId": check.game_id,
                    "success": False,
                    "code": 400,
                    "error": {"name": "ValidationError", "message": str(e)},
                }
            )
            continue
        payload = result_payload(outcome.result, outcome.profile)
        results.append({"gameId": check.game_id, **payload})

    return ok(
        {
            "results": results,
            "total_checks": len(body.checks),
            "successful_checks": sum(1 for r in results if r["success"]),
        },
        request=request,
        message="Bulk check completed",
    )
