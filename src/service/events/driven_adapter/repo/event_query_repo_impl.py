"""
Event Query Repository Implementation - CQRS Read Side
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncContextManager, AsyncIterator, Callable, Dict, List, Optional, Sequence

from sqlalchemy import Row, Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import RepositoryError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.events.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.events.domain.entity.event_entity import EVENT_DATE_FORMAT, EventEntity
from src.service.events.domain.entity.spot_entity import SpotEntity
from src.service.events.domain.entity.ticket_entity import TicketEntity
from src.service.events.domain.errors import EventNotFoundError, SpotNotFoundError
from src.service.events.driven_adapter.model.event_model import EventModel
from src.service.events.driven_adapter.model.spot_model import SpotModel
from src.service.events.driven_adapter.model.ticket_model import TicketModel


_EVENT_COLUMNS = (
    'name',
    'location',
    'organization',
    'rating',
    'date',
    'image_url',
    'capacity',
    'price',
    'partner_id',
)


def _has_null_event_column(event_model: EventModel) -> bool:
    return any(getattr(event_model, column) is None for column in _EVENT_COLUMNS)


class EventQueryRepoImpl(IEventQueryRepo):
    """Event Query Repository Implementation - CQRS Read Side"""

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self.session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            Logger.base.error(f'[QUERY_REPO] {operation} failed: {e}')
            raise RepositoryError(f'{operation} failed') from e

    @staticmethod
    def _event_tree_statement() -> Select:
        return (
            select(EventModel, SpotModel, TicketModel)
            .outerjoin(SpotModel, SpotModel.event_id == EventModel.id)
            .outerjoin(TicketModel, TicketModel.spot_id == SpotModel.id)
            .order_by(EventModel.date, EventModel.id, SpotModel.name, SpotModel.id, TicketModel.id)
        )

    def _model_to_event(self, event_model: EventModel) -> EventEntity:
        try:
            return EventEntity(
                id=event_model.id,
                name=event_model.name,
                location=event_model.location,
                organization=event_model.organization,
                rating=event_model.rating,
                date=datetime.strptime(event_model.date, EVENT_DATE_FORMAT),
                image_url=event_model.image_url,
                capacity=event_model.capacity,
                price=event_model.price,
                partner_id=event_model.partner_id,
            )
        except (ValueError, ValidationError) as e:
            raise RepositoryError(f'event {event_model.id} cannot be decoded: {e}') from e

    def _model_to_spot(self, spot_model: SpotModel) -> SpotEntity:
        try:
            return SpotEntity(
                id=spot_model.id,
                event_id=spot_model.event_id,
                name=spot_model.name,
                status=spot_model.status,
                ticket_id=spot_model.ticket_id,
            )
        except (ValueError, ValidationError) as e:
            raise RepositoryError(f'spot {spot_model.id} cannot be decoded: {e}') from e

    def _model_to_ticket(self, ticket_model: TicketModel) -> TicketEntity:
        try:
            return TicketEntity(
                id=ticket_model.id,
                event_id=ticket_model.event_id,
                spot_id=ticket_model.spot_id,
                ticket_type=ticket_model.ticket_type,
                price=ticket_model.price,
            )
        except (ValueError, ValidationError) as e:
            raise RepositoryError(f'ticket {ticket_model.id} cannot be decoded: {e}') from e

    def _build_event_trees(
        self, rows: Sequence[Row[tuple[EventModel, Optional[SpotModel], Optional[TicketModel]]]]
    ) -> List[EventEntity]:
        """
        Fold joined (event, spot, ticket) rows into event trees.

        An event appears on one row per spot (and per ticket of that spot), so events and
        spots are deduplicated by id while preserving first-seen order.
        """
        events: Dict[str, EventEntity] = {}
        spots: Dict[str, SpotEntity] = {}

        for event_model, spot_model, ticket_model in rows:
            if _has_null_event_column(event_model):
                continue

            event = events.get(event_model.id)
            if event is None:
                event = self._model_to_event(event_model)
                events[event.id] = event

            if spot_model is not None and spot_model.id not in spots:
                spot = self._model_to_spot(spot_model)
                spots[spot.id] = spot
                event.add_spot(spot)

            if ticket_model is not None:
                event.add_ticket(self._model_to_ticket(ticket_model))

        return list(events.values())

    @Logger.io
    async def list_events(self) -> List[EventEntity]:
        async with self._get_session('list_events') as session:
            result = await session.execute(self._event_tree_statement())
            rows = result.all()

        events = self._build_event_trees(rows)
        Logger.base.info(f'[LIST_EVENTS] Loaded {len(events)} events from {len(rows)} rows')
        return events

    @Logger.io
    async def find_event_by_id(self, *, event_id: str) -> EventEntity:
        async with self._get_session('find_event_by_id') as session:
            result = await session.execute(
                self._event_tree_statement().where(EventModel.id == event_id)
            )
            rows = result.all()

        events = self._build_event_trees(rows)
        if not events:
            raise EventNotFoundError(event_id)
        return events[0]

    @Logger.io
    async def find_event_row_by_id(self, *, event_id: str) -> EventEntity:
        """Event columns only: spots and tickets are left empty."""
        async with self._get_session('find_event_row_by_id') as session:
            result = await session.execute(select(EventModel).where(EventModel.id == event_id))
            event_model = result.scalar_one_or_none()

        if event_model is None or _has_null_event_column(event_model):
            raise EventNotFoundError(event_id)
        return self._model_to_event(event_model)

    @Logger.io
    async def find_spots_by_event_id(self, *, event_id: str) -> List[SpotEntity]:
        async with self._get_session('find_spots_by_event_id') as session:
            result = await session.execute(
                select(SpotModel)
                .where(SpotModel.event_id == event_id)
                .order_by(SpotModel.name, SpotModel.id)
            )
            spot_models = result.scalars().all()

        return [self._model_to_spot(spot_model) for spot_model in spot_models]

    @Logger.io
    async def find_spot_by_name(self, *, event_id: str, name: str) -> SpotEntity:
        async with self._get_session('find_spot_by_name') as session:
            result = await session.execute(
                select(SpotModel).where(SpotModel.event_id == event_id, SpotModel.name == name)
            )
            spot_model = result.scalar_one_or_none()

        if spot_model is None:
            raise SpotNotFoundError(name)
        return self._model_to_spot(spot_model)

    @Logger.io
    async def find_spot_by_id(self, *, event_id: str, spot_id: str) -> SpotEntity:
        async with self._get_session('find_spot_by_id') as session:
            result = await session.execute(
                select(SpotModel).where(SpotModel.event_id == event_id, SpotModel.id == spot_id)
            )
            spot_model = result.scalar_one_or_none()

        if spot_model is None:
            raise SpotNotFoundError(spot_id)
        return self._model_to_spot(spot_model)
