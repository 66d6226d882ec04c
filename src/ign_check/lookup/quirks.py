from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ign_check.lookup.types import RawProviderResponse

NOT_FOUND_ERROR_CODE = "-100"


def _success_flag_missing(raw: RawProviderResponse) -> bool:
    return not raw.success


def _error_code_sentinel(raw: RawProviderResponse) -> bool:
    # The sentinel overrides `success: true`; an explicit false still counts.
    return raw.error_code == NOT_FOUND_ERROR_CODE or raw.success is False


def _success_or_sentinel(raw: RawProviderResponse) -> bool:
    return not raw.success or raw.error_code == NOT_FOUND_ERROR_CODE


@dataclass(frozen=True)
class Quirk:
    """How a voucher type tells us the account does not exist."""

    name: str
    is_not_found: Callable[[RawProviderResponse], bool]
    not_found_reason: str = "IGN not found"


SUCCESS_FLAG = Quirk(name="success_flag", is_not_found=_success_flag_missing)
ERROR_CODE_SENTINEL = Quirk(name="error_code_sentinel", is_not_found=_error_code_sentinel)
SUCCESS_OR_SENTINEL = Quirk(name="success_or_sentinel", is_not_found=_success_or_sentinel)
