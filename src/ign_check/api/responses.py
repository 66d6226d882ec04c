from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ign_check.lookup.types import (
    Found,
    GameProfile,
    LookupResult,
    NotFound,
    Unsupported,
)

STATUS_BY_OUTCOME: dict[str, int] = {
    "found": 200,
    "not_found": 404,
    "unsupported": 501,
    "upstream_error": 502,
}


class ApiErrorModel(BaseModel):
    name: str
    message: str
    details: list[dict[str, Any]] | None = None


class ApiMetaModel(BaseModel):
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    request_id: str | None = None
    total_count: int | None = None


class ApiEnvelope(BaseModel):
    success: bool
    code: int
    message: str | None = None
    data: Any = None
    error: ApiErrorModel | None = None
    meta: ApiMetaModel = Field(default_factory=ApiMetaModel)


def _meta(request: Request | None, **extra: Any) -> ApiMetaModel:
    request_id = getattr(request.state, "request_id", None) if request is not None else None
    return ApiMetaModel(request_id=request_id, **extra)


def ok(
    data: Any,
    *,
    request: Request | None = None,
    message: str | None = None,
    code: int = 200,
    **meta: Any,
) -> JSONResponse:
    body = ApiEnvelope(
        success=True,
        code=code,
        message=message,
        data=data,
        meta=_meta(request, **meta),
    )
    return JSONResponse(status_code=code, content=body.model_dump(mode="json", exclude_none=True))


def fail(
    code: int,
    name: str,
    message: str,
    *,
    request: Request | None = None,
    details: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    body = ApiEnvelope(
        success=False,
        code=code,
        error=ApiErrorModel(name=name, message=message, details=details),
        meta=_meta(request),
    )
    return JSONResponse(status_code=code, content=body.model_dump(mode="json", exclude_none=True))


# -----------------------------
# LookupResult -> wire
# -----------------------------


def outcome_of(result: LookupResult) -> str:
    if isinstance(result, Found):
        return "found"
    if isinstance(result, NotFound):
        return "not_found"
    if isinstance(result, Unsupported):
        return "unsupported"
    return "upstream_error"


def status_code_of(result: LookupResult) -> int:
    return STATUS_BY_OUTCOME[outcome_of(result)]


def result_payload(result: LookupResult, profile: GameProfile | None) -> dict[str, Any]:
    """Envelope body (without meta) for one lookup result."""

    code = status_code_of(result)
    if isinstance(result, Found):
        label = profile.account_label if profile is not None else "id"
        account: dict[str, Any] = {"ign": result.ign, label: result.account_id}
        if result.zone is not None:
            account[profile.zone_label if profile is not None else "zone"] = result.zone
        return {
            "success": True,
            "code": code,
            "data": {"game": result.game, "account": account},
        }

    if isinstance(result, NotFound):
        error = {"name": "Not Found", "message": result.reason}
    elif isinstance(result, Unsupported):
        error = {
            "name": "Not Implemented",
            "message": f"IGN checking for {result.game_name} is not yet supported",
        }
    else:
        error = {"name": "Bad Gateway", "message": result.detail}

    return {"success": False, "code": code, "error": error}


def result_response(
    result: LookupResult, profile: GameProfile | None, *, request: Request | None = None
) -> JSONResponse:
    content = result_payload(result, profile)
    content["meta"] = _meta(request).model_dump(exclude_none=True)
    return JSONResponse(status_code=content["code"], content=content)
