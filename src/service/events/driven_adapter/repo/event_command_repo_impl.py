"""
Event Command Repository Implementation - CQRS Write Side
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

import anyio
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import RepositoryError
from src.platform.logging.loguru_io import Logger
from src.service.events.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.events.domain.entity.event_entity import EVENT_DATE_FORMAT, EventEntity
from src.service.events.domain.entity.spot_entity import SpotEntity
from src.service.events.domain.entity.ticket_entity import TicketEntity
from src.service.events.domain.enum.spot_status import SpotStatus
from src.service.events.domain.errors import SpotAlreadyReservedError
from src.service.events.driven_adapter.model.event_model import EventModel
from src.service.events.driven_adapter.model.spot_model import SpotModel
from src.service.events.driven_adapter.model.ticket_model import TicketModel


class EventCommandRepoImpl(IEventCommandRepo):
    """Event Command Repository Implementation - CQRS Write Side"""

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self, operation: str) -> AsyncIterator[AsyncSession]:
        """
        Session for one write transaction, shielded from cancellation.

        A cancel landing between BEGIN and COMMIT would skip the rollback and the
        connection release, leaving SQLite's write lock held for every later writer.
        Statements are bounded by the driver instead (busy_timeout / command_timeout);
        an expired caller deadline only takes effect once the write has finished.
        """
        try:
            with anyio.CancelScope(shield=True):
                async with self.session_factory() as session:
                    yield session
        except SQLAlchemyError as e:
            Logger.base.error(f'[COMMAND_REPO] {operation} failed: {e}')
            raise RepositoryError(f'{operation} failed') from e

    @staticmethod
    def _event_to_model(event: EventEntity) -> EventModel:
        return EventModel(
            id=event.id,
            name=event.name,
            location=event.location,
            organization=event.organization,
            rating=event.rating.value,
            date=event.date.strftime(EVENT_DATE_FORMAT),
            image_url=event.image_url,
            capacity=event.capacity,
            price=event.price,
            partner_id=event.partner_id,
        )

    @staticmethod
    def _spot_to_model(spot: SpotEntity) -> SpotModel:
        return SpotModel(
            id=spot.id,
            event_id=spot.event_id,
            name=spot.name,
            status=spot.status.value,
            ticket_id=spot.ticket_id or None,
        )

    @staticmethod
    def _ticket_to_model(ticket: TicketEntity) -> TicketModel:
        return TicketModel(
            id=ticket.id,
            event_id=ticket.event_id,
            spot_id=ticket.spot_id,
            ticket_type=ticket.ticket_type.value,
            price=ticket.price,
        )

    @Logger.io
    async def create_event(self, *, event: EventEntity) -> EventEntity:
        async with self._get_session('create_event') as session:
            async with session.begin():
                session.add(self._event_to_model(event))

        Logger.base.info(f'[CREATE_EVENT] Created event {event.id} ({event.name})')
        return event

    @Logger.io
    async def create_spot(self, *, spot: SpotEntity) -> SpotEntity:
        async with self._get_session('create_spot') as session:
            async with session.begin():
                session.add(self._spot_to_model(spot))

        return spot

    @Logger.io
    async def create_ticket(self, *, ticket: TicketEntity) -> TicketEntity:
        async with self._get_session('create_ticket') as session:
            async with session.begin():
                session.add(self._ticket_to_model(ticket))

        return ticket

    @Logger.io
    async def reserve_spot(self, *, spot_id: str, ticket: TicketEntity) -> SpotEntity:
        async with self._get_session('reserve_spot') as session:
            async with session.begin():
                # Conditional transition: only one writer can still see the spot available
                result = await session.execute(
                    update(SpotModel)
                    .where(
                        SpotModel.id == spot_id,
                        SpotModel.status == SpotStatus.AVAILABLE.value,
                    )
                    .values(status=SpotStatus.SOLD.value, ticket_id=ticket.id)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise SpotAlreadyReservedError(spot_id)

                session.add(self._ticket_to_model(ticket))
                await session.flush()

                sold = await session.execute(select(SpotModel).where(SpotModel.id == spot_id))
                spot_model = sold.scalar_one()
                spot = SpotEntity(
                    id=spot_model.id,
                    event_id=spot_model.event_id,
                    name=spot_model.name,
                    status=spot_model.status,
                    ticket_id=spot_model.ticket_id,
                )

        Logger.base.info(f'🎫 [RESERVE] Spot {spot.name} ({spot_id}) sold, ticket {ticket.id}')
        return spot
