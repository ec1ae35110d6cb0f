from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List

import attrs

from src.platform.types.uuid7_id import new_uuid7_id
from src.service.events.domain.entity.spot_entity import SpotEntity
from src.service.events.domain.entity.ticket_entity import TicketEntity
from src.service.events.domain.enum.rating import Rating
from src.service.events.domain.errors import InvalidEventError


# Event dates are exchanged and stored as `YYYY-MM-DD HH:MM:SS`
EVENT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise InvalidEventError(f'Event {attribute.name} cannot be empty')


def _validate_non_negative(
    instance: object, attribute: attrs.Attribute, value: int | Decimal
) -> None:
    if value < 0:
        raise InvalidEventError(f'Event {attribute.name} must not be negative')


def _to_rating(value: Rating | str) -> Rating:
    try:
        return Rating(value)
    except ValueError as e:
        raise InvalidEventError(f'Event rating is invalid: {value}') from e


def _to_price(value: Decimal | int | str) -> Decimal:
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise InvalidEventError(f'Event price is invalid: {value}') from e


@attrs.define
class EventEntity:
    name: str = attrs.field(validator=_validate_non_empty_string)
    location: str
    organization: str
    rating: Rating = attrs.field(converter=_to_rating)
    date: datetime
    image_url: str
    capacity: int = attrs.field(validator=_validate_non_negative)
    price: Decimal = attrs.field(converter=_to_price, validator=_validate_non_negative)
    partner_id: int
    id: str = attrs.field(factory=new_uuid7_id)
    spots: List[SpotEntity] = attrs.field(factory=list)
    tickets: List[TicketEntity] = attrs.field(factory=list)

    def add_spot(self, spot: SpotEntity) -> None:
        self.spots.append(spot)

    def add_ticket(self, ticket: TicketEntity) -> None:
        self.tickets.append(ticket)
