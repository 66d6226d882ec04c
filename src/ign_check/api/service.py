from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ign_check.api.responses import outcome_of, status_code_of
from ign_check.core.cache import TTLCache
from ign_check.core.text import cache_key, sanitize_input
from ign_check.db.repos.lookup_check_repo import LookupCheckRepository
from ign_check.lookup.dispatcher import LookupDispatcher
from ign_check.lookup.providers.base.errors import InvalidLookupRequest
from ign_check.lookup.types import Found, GameProfile, LookupResult, NotFound

logger = logging.getLogger(__name__)

ACCOUNT_ID_KEYS = ("id", "uid", "tag", "riot_id", "user_id")
ZONE_KEYS = ("zone", "zone_id", "server")


def _first(params: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = params.get(key)
        if value is None:
            continue
        value = sanitize_input(str(value))
        if value:
            return value
    return None


@dataclass(frozen=True)
class CheckOutcome:
    game_code: str
    profile: GameProfile | None
    result: LookupResult
    cached: bool = False


@dataclass
class LookupService:
    """
    HTTP-side wrapper around the dispatcher.

    Adds input sanitising, the result cache and the lookup log. Only Found and
    NotFound results are cached; upstream failures are always retried fresh.
    """

    dispatcher: LookupDispatcher
    cache: TTLCache[LookupResult] | None = None
    session_factory: sessionmaker[Session] | None = None

    def profile(self, game_code: str) -> GameProfile | None:
        return self.dispatcher.registry.get(game_code)

    def check_params(
        self,
        game_code: str,
        params: Mapping[str, Any],
        *,
        client_ip: str | None = None,
        request_id: str | None = None,
    ) -> CheckOutcome:
        game_code = sanitize_input(game_code).lower()
        profile = self.profile(game_code)

        keys = ACCOUNT_ID_KEYS
        if profile is not None:
            keys = (profile.account_label, *ACCOUNT_ID_KEYS)
        user_id = _first(params, keys)
        zone_id = _first(params, ZONE_KEYS)

        if profile is not None and user_id is None:
            raise InvalidLookupRequest(
                f"Missing account id for {profile.display_name} "
                f"(expected '{profile.account_label}')"
            )

        return self.check(
            game_code,
            user_id or "",
            zone_id,
            client_ip=client_ip,
            request_id=request_id,
        )

    def check(
        self,
        game_code: str,
        user_id: str,
        zone_id: str | None = None,
        *,
        client_ip: str | None = None,
        request_id: str | None = None,
    ) -> CheckOutcome:
        game_code = sanitize_input(game_code).lower()
        user_id = sanitize_input(user_id)
        zone_id = sanitize_input(zone_id) if zone_id else None
        # Validate before the cache read so a rejected request never sees a cached hit.
        profile = self.dispatcher.validate(game_code, user_id, zone_id)

        key = cache_key(game_code, user_id, zone_id)
        if self.cache is not None:
            hit = self.cache.get(key)
            if hit is not None:
                logger.debug("cache hit %s", key)
                return CheckOutcome(game_code=game_code, profile=profile, result=hit, cached=True)

        started = time.perf_counter()
        result = self.dispatcher.dispatch(game_code, user_id, zone_id)
        duration_ms = int((time.perf_counter() - started) * 1000)

        if self.cache is not None and isinstance(result, Found | NotFound):
            self.cache.set(key, result)

        self._record(
            game_code=game_code,
            user_id=user_id,
            zone_id=zone_id,
            result=result,
            duration_ms=duration_ms,
            client_ip=client_ip,
            request_id=request_id,
        )
        return CheckOutcome(game_code=game_code, profile=profile, result=result)

    def _record(
        self,
        *,
        game_code: str,
        user_id: str,
        zone_id: str | None,
        result: LookupResult,
        duration_ms: int,
        client_ip: str | None,
        request_id: str | None,
    ) -> None:
        if self.session_factory is None:
            return

        session = self.session_factory()
        repo = LookupCheckRepository(session)
        try:
            repo.record(
                game_code=game_code,
                user_id=user_id,
                zone_id=zone_id,
                outcome=outcome_of(result),
                status_code=status_code_of(result),
                duration_ms=duration_ms,
                ign=result.ign if isinstance(result, Found) else None,
                client_ip=client_ip,
                request_id=request_id,
            )
            repo.commit()
        except SQLAlchemyError:
            # The lookup log never fails the lookup itself.
            repo.rollback()
            logger.exception("failed to store lookup check for %s", game_code)
        finally:
            session.close()
