from typing import TYPE_CHECKING

import attrs

from src.platform.types.uuid7_id import new_uuid7_id
from src.service.events.domain.enum.spot_status import SpotStatus
from src.service.events.domain.errors import (
    SpotAlreadyReservedError,
    SpotNameMustEndWithNumberError,
    SpotNameMustStartWithLetterError,
    SpotNameRequiredError,
    SpotNameTooShortError,
)


if TYPE_CHECKING:
    from src.service.events.domain.entity.event_entity import EventEntity


def validate_spot_name(name: str) -> None:
    """
    Spot names are a row letter followed by a seat number, e.g. `A1`, `B10`.

    Checks run in order and the first violation wins.
    """
    if not name:
        raise SpotNameRequiredError()
    if len(name) < 2:
        raise SpotNameTooShortError()
    if not ('A' <= name[0] <= 'Z'):
        raise SpotNameMustStartWithLetterError()
    if not ('0' <= name[1] <= '9'):
        raise SpotNameMustEndWithNumberError()


def _validate_spot_name(instance: object, attribute: attrs.Attribute, value: str) -> None:
    validate_spot_name(value)


def generate_spot_name(index: int) -> str:
    """0 -> A1, 9 -> A10, 10 -> B1, ..."""
    letter = chr(ord('A') + index // 10)
    number = index % 10 + 1
    return f'{letter}{number}'


@attrs.define
class SpotEntity:
    event_id: str
    name: str = attrs.field(validator=_validate_spot_name)
    status: SpotStatus = attrs.field(default=SpotStatus.AVAILABLE, converter=SpotStatus)
    ticket_id: str = attrs.field(default='', converter=attrs.converters.default_if_none(''))
    id: str = attrs.field(factory=new_uuid7_id)

    @classmethod
    def create(cls, *, event: 'EventEntity', name: str) -> 'SpotEntity':
        return cls(event_id=event.id, name=name)

    @property
    def is_available(self) -> bool:
        return self.status == SpotStatus.AVAILABLE

    def reserve(self, *, ticket_id: str) -> None:
        if self.status == SpotStatus.SOLD:
            raise SpotAlreadyReservedError(self.id)
        self.status = SpotStatus.SOLD
        self.ticket_id = ticket_id
