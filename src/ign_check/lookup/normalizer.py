from __future__ import annotations

from ign_check.core.text import clean_username
from ign_check.lookup.providers.base.errors import ProviderMappingError
from ign_check.lookup.quirks import Quirk
from ign_check.lookup.types import (
    Found,
    GameProfile,
    LookupResult,
    NotFound,
    RawProviderResponse,
    UpstreamError,
)


def _require(value: str | None, field_name: str, profile: GameProfile) -> str:
    if not value:
        raise ProviderMappingError(
            f"Provider reported success without {field_name}",
            context={"game": profile.code},
        )
    return value


def normalize(
    raw: RawProviderResponse, profile: GameProfile, quirk: Quirk | None = None
) -> LookupResult:
    """
    Turn a raw provider body into a LookupResult.

    The quirk's not-found check runs first. A body that passes it must carry
    the confirmation fields and user id; anything missing is an upstream
    error rather than a silently defaulted value.
    """

    quirk = quirk or profile.quirk
    if quirk.is_not_found(raw):
        return NotFound(reason=quirk.not_found_reason)

    cf = raw.confirmation_fields
    user = raw.user
    try:
        game = _require(cf.product_name if cf else None, "confirmationFields.productName", profile)
        username = _require(cf.username if cf else None, "confirmationFields.username", profile)
        account_id = _require(user.user_id if user else None, "user.userId", profile)
    except ProviderMappingError as e:
        return UpstreamError(detail=str(e))

    zone: str | None = None
    if user is not None and user.zone_id:
        zone = profile.render_zone(user.zone_id)

    return Found(
        game=game,
        ign=clean_username(username),
        account_id=account_id,
        zone=zone,
    )
