from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from ign_check.core.config import Settings, settings
from ign_check.lookup.providers.base.client import BaseHttpClient
from ign_check.lookup.providers.base.errors import ProviderRequestError
from ign_check.lookup.types import GameProfile, RawProviderResponse

logger = logging.getLogger(__name__)


def build_form(
    profile: GameProfile, user_id: str, zone_id: str, *, shop_lang: str
) -> dict[str, str]:
    return {
        "voucherPricePoint.id": profile.price_point_id,
        "voucherPricePoint.price": profile.price,
        "voucherPricePoint.variablePrice": "0",
        "user.userId": user_id,
        "user.zoneId": zone_id,
        "voucherTypeName": profile.voucher_type_name,
        "shopLang": shop_lang,
    }


@dataclass
class CodashopClient:
    """
    Calls the storefront's payment-initiation endpoint for one account.

    Transport failures and non-2xx responses are retried with exponential
    backoff; any parsed 2xx body is returned as-is, whatever it says.
    """

    http: BaseHttpClient
    path: str = "/initPayment.action"
    shop_lang: str = "id_ID"
    max_attempts: int = 3
    backoff_base_s: float = 1.0

    _sleep: Any = field(default=time.sleep, repr=False)

    @classmethod
    def from_settings(cls, cfg: Settings = settings) -> CodashopClient:
        http = BaseHttpClient(
            base_url=cfg.provider_base_url,
            timeout_s=cfg.api_timeout_s,
            headers={
                "Origin": cfg.provider_origin,
                "Referer": cfg.provider_origin.rstrip("/") + "/",
            },
        )
        return cls(
            http=http,
            path=cfg.provider_path,
            shop_lang=cfg.provider_shop_lang,
            max_attempts=cfg.api_retries,
            backoff_base_s=cfg.retry_backoff_s,
        )

    def close(self) -> None:
        self.http.close()

    def backoff_s(self, attempt: int) -> float:
        """Delay after the given (1-based) failed attempt: base, 2*base, 4*base..."""

        return self.backoff_base_s * (2 ** (attempt - 1))

    def call(self, profile: GameProfile, user_id: str, zone_id: str) -> RawProviderResponse:
        form = build_form(profile, user_id, zone_id, shop_lang=self.shop_lang)
        attempts = max(1, self.max_attempts)

        attempt = 1
        while True:
            try:
                payload = self.http.post_form(self.path, data=form)
            except ProviderRequestError as e:
                logger.warning(
                    "codashop attempt %d/%d failed for %s: %s",
                    attempt,
                    attempts,
                    profile.code,
                    e,
                )
                if attempt >= attempts:
                    raise ProviderRequestError(str(e), attempts=attempts) from e
                self._sleep(self.backoff_s(attempt))
                attempt += 1
                continue
            return RawProviderResponse.from_json(payload)
