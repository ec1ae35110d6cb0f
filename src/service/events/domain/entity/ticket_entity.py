from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

import attrs

from src.platform.types.uuid7_id import new_uuid7_id
from src.service.events.domain.enum.ticket_type import TicketType
from src.service.events.domain.errors import InvalidTicketTypeError


if TYPE_CHECKING:
    from src.service.events.domain.entity.spot_entity import SpotEntity


CENT = Decimal('0.01')


def to_ticket_type(value: TicketType | str) -> TicketType:
    try:
        return TicketType(value)
    except ValueError as e:
        raise InvalidTicketTypeError(value) from e


def calculate_ticket_price(*, ticket_type: TicketType, base_price: Decimal) -> Decimal:
    """Full ticket pays the base price, half ticket pays half of it."""
    if ticket_type == TicketType.HALF:
        return (base_price / 2).quantize(CENT, rounding=ROUND_HALF_UP)
    return base_price.quantize(CENT, rounding=ROUND_HALF_UP)


@attrs.frozen
class TicketEntity:
    event_id: str
    spot_id: str
    ticket_type: TicketType = attrs.field(converter=to_ticket_type)
    price: Decimal = attrs.field(converter=Decimal)
    id: str = attrs.field(factory=new_uuid7_id)

    @classmethod
    def create(
        cls,
        *,
        spot: 'SpotEntity',
        ticket_type: TicketType | str,
        base_price: Decimal,
    ) -> 'TicketEntity':
        ticket_type = to_ticket_type(ticket_type)
        return cls(
            event_id=spot.event_id,
            spot_id=spot.id,
            ticket_type=ticket_type,
            price=calculate_ticket_price(ticket_type=ticket_type, base_price=Decimal(base_price)),
        )
