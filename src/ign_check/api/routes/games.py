from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from ign_check.api.deps import get_lookup_service
from ign_check.api.responses import fail, ok
from ign_check.api.schemas import GameOut
from ign_check.api.service import LookupService
from ign_check.lookup.types import GameProfile

router = APIRouter(prefix="/api/games", tags=["games"])


def _game_out(profile: GameProfile) -> dict:
    return GameOut(
        code=profile.code,
        name=profile.display_name,
        platform=profile.platform,
        description=profile.description,
        requires_zone=profile.requires_zone,
        account_label=profile.account_label,
        zone_label=profile.zone_label,
        verified=profile.verified,
    ).model_dump()


@router.get("")
def list_games(
    request: Request, service: LookupService = Depends(get_lookup_service)
) -> JSONResponse:
    games = [_game_out(p) for p in service.dispatcher.registry]
    return ok(
        games,
        request=request,
        message="Games retrieved successfully",
        total_count=len(games),
    )


@router.get("/search")
def search_games(
    request: Request,
    q: str = Query("", description="Matches name, code, description or platform."),
    service: LookupService = Depends(get_lookup_service),
) -> JSONResponse:
    needle = q.strip().lower()
    if not needle:
        return fail(
            400,
            "ValidationError",
            'Please provide a search query parameter "q"',
            request=request,
        )

    games = [
        _game_out(p)
        for p in service.dispatcher.registry
        if any(
            needle in field.lower()
            for field in (p.display_name, p.code, p.description, p.platform)
        )
    ]
    return ok(
        games,
        request=request,
        message="Search completed successfully",
        total_count=len(games),
    )


@router.get("/{code}")
def get_game(
    code: str, request: Request, service: LookupService = Depends(get_lookup_service)
) -> JSONResponse:
    profile = service.profile(code)
    if profile is None:
        return fail(404, "NotFoundError", f"Game with code '{code}' not found", request=request)
    return ok(_game_out(profile), request=request, message="Game details retrieved successfully")
