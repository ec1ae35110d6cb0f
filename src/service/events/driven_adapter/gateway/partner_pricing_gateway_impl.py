"""
Partner Pricing Gateway - HTTP client for partner ticket prices

Each partner exposes `GET {base_url}/events/{event_id}/price` returning `{"price": "<decimal>"}`.
"""

from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

import httpx
import orjson

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.events.app.interface.i_partner_pricing_gateway import IPartnerPricingGateway
from src.service.events.domain.errors import PartnerPricingUnavailableError


class PartnerPricingGatewayImpl(IPartnerPricingGateway):
    def __init__(
        self,
        *,
        base_urls: Dict[int, str],
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_urls = {int(partner_id): url.rstrip('/') for partner_id, url in base_urls.items()}
        self.timeout = timeout
        self._transport = transport

    @Logger.io
    async def quote_full_price(self, *, partner_id: int, event_id: str) -> Optional[Decimal]:
        base_url = self.base_urls.get(partner_id)
        if base_url is None:
            return None

        try:
            price = await self._fetch_price(
                partner_id=partner_id, url=f'{base_url}/events/{event_id}/price'
            )
        except PartnerPricingUnavailableError:
            metrics.record_partner_price_quote(partner_id=partner_id, result='unavailable')
            raise

        metrics.record_partner_price_quote(partner_id=partner_id, result='success')
        Logger.base.info(f'💱 [PARTNER] Partner {partner_id} quoted {price} for event {event_id}')
        return price

    async def _fetch_price(self, *, partner_id: int, url: str) -> Decimal:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PartnerPricingUnavailableError(
                partner_id, f'status {e.response.status_code}'
            ) from e
        except httpx.HTTPError as e:
            raise PartnerPricingUnavailableError(partner_id, type(e).__name__) from e

        try:
            body = orjson.loads(response.content)
            price = Decimal(str(body['price']))
        except (orjson.JSONDecodeError, KeyError, TypeError, InvalidOperation) as e:
            raise PartnerPricingUnavailableError(partner_id, 'malformed price response') from e

        if not price.is_finite() or price < 0:
            raise PartnerPricingUnavailableError(partner_id, f'invalid price {price}')
        return price
