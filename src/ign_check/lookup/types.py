from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from ign_check.lookup.quirks import Quirk

ZoneResolver = Callable[[str], str]
ZoneRenderer = Callable[[str], str]
UserIdFormatter = Callable[[str], str]


@dataclass(frozen=True)
class GameProfile:
    """
    Static descriptor for one title the provider can look up.

    Instances are defined once at import time and never mutated.
    """

    code: str
    display_name: str
    voucher_type_name: str
    price_point_id: str
    price: str
    quirk: Quirk
    requires_zone: bool = False
    default_zone_id: str | None = None
    zone_resolver: ZoneResolver | None = None
    zone_renderer: ZoneRenderer | None = None
    user_id_formatter: UserIdFormatter | None = None
    account_label: str = "id"
    zone_label: str = "zone"
    platform: str = "Mobile"
    description: str = ""
    verified: bool = True

    def resolve_zone(self, user_id: str, zone_id: str | None = None) -> str:
        """Explicit zone wins, then the resolver, then the profile default."""

        if zone_id:
            return zone_id
        if self.zone_resolver is not None:
            return self.zone_resolver(user_id)
        return self.default_zone_id or ""

    def format_user_id(self, user_id: str) -> str:
        if self.user_id_formatter is None:
            return user_id
        return self.user_id_formatter(user_id)

    def render_zone(self, zone_id: str) -> str:
        if self.zone_renderer is None:
            return zone_id
        return self.zone_renderer(zone_id)


@dataclass(frozen=True)
class LookupRequest:
    game_code: str
    user_id: str
    zone_id: str | None = None


# ---------------------------------------------------------------------------
# Provider boundary
# ---------------------------------------------------------------------------


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


@dataclass(frozen=True)
class ConfirmationFields:
    product_name: str | None = None
    username: str | None = None


@dataclass(frozen=True)
class ProviderUser:
    user_id: str | None = None
    zone_id: str | None = None


@dataclass(frozen=True)
class RawProviderResponse:
    """
    Partial view of the provider's initPayment JSON body.

    Every field is optional: the provider omits most of them on failure and is
    not consistent across voucher types.
    """

    success: bool | None = None
    error_code: str | None = None
    confirmation_fields: ConfirmationFields | None = None
    user: ProviderUser | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> RawProviderResponse:
        success = payload.get("success")
        if not isinstance(success, bool):
            success = None

        confirmation: ConfirmationFields | None = None
        cf = payload.get("confirmationFields")
        if isinstance(cf, Mapping):
            confirmation = ConfirmationFields(
                product_name=_opt_str(cf.get("productName")),
                username=_opt_str(cf.get("username")),
            )

        user: ProviderUser | None = None
        u = payload.get("user")
        if isinstance(u, Mapping):
            user = ProviderUser(
                user_id=_opt_str(u.get("userId")),
                zone_id=_opt_str(u.get("zoneId")),
            )

        return cls(
            success=success,
            error_code=_opt_str(payload.get("errorCode")),
            confirmation_fields=confirmation,
            user=user,
        )


# ---------------------------------------------------------------------------
# Normalized results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Found:
    game: str
    ign: str
    account_id: str
    zone: str | None = None


@dataclass(frozen=True)
class NotFound:
    reason: str


@dataclass(frozen=True)
class Unsupported:
    game_code: str
    game_name: str


@dataclass(frozen=True)
class UpstreamError:
    detail: str


LookupResult = Union[Found, NotFound, Unsupported, UpstreamError]
