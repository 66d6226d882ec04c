from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from ign_check.lookup.games import build_default_registry, unsupported_game_name
from ign_check.lookup.normalizer import normalize
from ign_check.lookup.providers.base.errors import InvalidLookupRequest, ProviderError
from ign_check.lookup.registry import GameRegistry
from ign_check.lookup.types import (
    GameProfile,
    LookupRequest,
    LookupResult,
    NotFound,
    RawProviderResponse,
    Unsupported,
    UpstreamError,
)

logger = logging.getLogger(__name__)


class LookupClient(Protocol):
    def call(self, profile: GameProfile, user_id: str, zone_id: str) -> RawProviderResponse:
        ...


@dataclass(frozen=True)
class LookupDispatcher:
    """Routes a lookup to its game profile. Holds no per-call state."""

    client: LookupClient
    registry: GameRegistry

    @classmethod
    def with_default_games(cls, client: LookupClient) -> LookupDispatcher:
        return cls(client=client, registry=build_default_registry())

    def validate(
        self, game_code: str, user_id: str, zone_id: str | None = None
    ) -> GameProfile | None:
        """
        Check a request against its game profile without calling out.

        Returns the profile, or None for an unknown game. Raises
        InvalidLookupRequest for an empty id or a missing required zone.
        """

        profile = self.registry.get(game_code)
        if profile is None:
            return None
        if not user_id or not user_id.strip():
            raise InvalidLookupRequest(f"{profile.display_name} requires a non-empty account id")
        if profile.requires_zone and not zone_id:
            raise InvalidLookupRequest(f"Zone parameter is required for {profile.display_name}")
        return profile

    def dispatch(self, game_code: str, user_id: str, zone_id: str | None = None) -> LookupResult:
        profile = self.validate(game_code, user_id, zone_id)
        if profile is None:
            logger.info("lookup for unsupported game %s", game_code)
            return Unsupported(game_code=game_code, game_name=unsupported_game_name(game_code))

        effective_zone = profile.resolve_zone(user_id, zone_id)
        outbound_user_id = profile.format_user_id(user_id)

        try:
            raw = self.client.call(profile, outbound_user_id, effective_zone)
        except ProviderError as e:
            logger.warning("lookup for %s failed upstream: %s", profile.code, e)
            return UpstreamError(detail=str(e))

        result = normalize(raw, profile, profile.quirk)
        if isinstance(result, UpstreamError):
            logger.warning("lookup for %s returned unusable body: %s", profile.code, result.detail)
        elif isinstance(result, NotFound):
            logger.info("lookup for %s: account not found", profile.code)
        return result

    def dispatch_request(self, request: LookupRequest) -> LookupResult:
        return self.dispatch(request.game_code, request.user_id, request.zone_id)
