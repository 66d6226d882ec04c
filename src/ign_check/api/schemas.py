from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CheckIgnBody(BaseModel):
    game_id: str = Field(alias="gameId", min_length=1)
    params: dict[str, Any]

    model_config = {"populate_by_name": True}


class BulkCheckBody(BaseModel):
    checks: list[CheckIgnBody] = Field(min_length=1, max_length=10)


class GameOut(BaseModel):
    code: str
    name: str
    platform: str
    description: str
    requires_zone: bool
    account_label: str
    zone_label: str
    verified: bool
