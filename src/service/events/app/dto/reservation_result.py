"""Reservation result DTO."""

import attrs

from src.service.events.domain.entity.spot_entity import SpotEntity
from src.service.events.domain.entity.ticket_entity import TicketEntity


@attrs.define(frozen=True)
class ReservationResult:
    """The sold spot together with the ticket written for it."""

    spot: SpotEntity
    ticket: TicketEntity
