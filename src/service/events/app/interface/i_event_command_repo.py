"""
Event Command Repository Interface

CQRS Write Side - inserts and the atomic spot reservation.
"""

from abc import ABC, abstractmethod

from src.service.events.domain.entity.event_entity import EventEntity
from src.service.events.domain.entity.spot_entity import SpotEntity
from src.service.events.domain.entity.ticket_entity import TicketEntity


class IEventCommandRepo(ABC):
    """Event Command Repository Interface - CQRS Write Side"""

    @abstractmethod
    async def create_event(self, *, event: EventEntity) -> EventEntity:
        """Insert an event row (spots and tickets are not cascaded)."""
        pass

    @abstractmethod
    async def create_spot(self, *, spot: SpotEntity) -> SpotEntity:
        """Insert a spot row. Unknown event or duplicate id raises RepositoryError."""
        pass

    @abstractmethod
    async def create_ticket(self, *, ticket: TicketEntity) -> TicketEntity:
        """Insert a ticket row. Unknown spot or duplicate id raises RepositoryError."""
        pass

    @abstractmethod
    async def reserve_spot(self, *, spot_id: str, ticket: TicketEntity) -> SpotEntity:
        """
        Mark the spot sold and insert its ticket in one transaction.

        The spot only transitions when it is still available at write time, so among
        concurrent callers exactly one succeeds.

        Raises:
            SpotAlreadyReservedError: the spot was not available (nothing written)
            RepositoryError: storage failure (nothing written)
        """
        pass
