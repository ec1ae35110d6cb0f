from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class IPartnerPricingGateway(ABC):
    @abstractmethod
    async def quote_full_price(self, *, partner_id: int, event_id: str) -> Optional[Decimal]:
        """
        Full ticket price quoted by the event's partner.

        Returns None when no partner endpoint is configured for `partner_id`.

        Raises:
            PartnerPricingUnavailableError: the partner could not produce a price
        """
        pass
