"""
Event Query Repository Interface

CQRS Read Side - every call rebuilds entities from storage, nothing is cached.
"""

from abc import ABC, abstractmethod
from typing import List

from src.service.events.domain.entity.event_entity import EventEntity
from src.service.events.domain.entity.spot_entity import SpotEntity


class IEventQueryRepo(ABC):
    """Event Query Repository Interface - CQRS Read Side"""

    @abstractmethod
    async def list_events(self) -> List[EventEntity]:
        """
        All events with their spots and tickets, from one events/spots/tickets LEFT JOIN.

        Raises:
            RepositoryError: storage failure or an undecodable row (no partial result)
        """
        pass

    @abstractmethod
    async def find_event_by_id(self, *, event_id: str) -> EventEntity:
        """
        Event with its spots and tickets.

        Raises:
            EventNotFoundError: no event with this id
        """
        pass

    @abstractmethod
    async def find_event_row_by_id(self, *, event_id: str) -> EventEntity:
        """
        Event columns only, without the spots/tickets join (spots and tickets stay empty).

        Raises:
            EventNotFoundError: no event with this id
        """
        pass

    @abstractmethod
    async def find_spots_by_event_id(self, *, event_id: str) -> List[SpotEntity]:
        """Spots of an event ordered by name (empty for unknown events)."""
        pass

    @abstractmethod
    async def find_spot_by_name(self, *, event_id: str, name: str) -> SpotEntity:
        """
        Raises:
            SpotNotFoundError: no spot with this name in the event
        """
        pass

    @abstractmethod
    async def find_spot_by_id(self, *, event_id: str, spot_id: str) -> SpotEntity:
        """
        Raises:
            SpotNotFoundError: no spot with this id in the event
        """
        pass
