"""
Integration tests for EventCommandRepoImpl on SQLite

The reservation tests run real concurrent transactions: every call opens its
own connection and the conditional UPDATE decides which one wins. Cancelled
reservations must leave no lock behind and no half-written spot.
"""

import asyncio
from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator, Callable

import anyio
import pytest
from sqlalchemy import func, select

from src.platform.database.orm_db_setting import Database, create_db_and_tables
from src.platform.exception.exceptions import RepositoryError, StorageTimeoutError
from src.service.events.app.command.reserve_spot_use_case import ReserveSpotUseCase
from src.service.events.domain.entity.event_entity import EventEntity
from src.service.events.domain.entity.spot_entity import SpotEntity
from src.service.events.domain.entity.ticket_entity import TicketEntity
from src.service.events.domain.enum.spot_status import SpotStatus
from src.service.events.domain.errors import SpotAlreadyReservedError, SpotNotFoundError
from src.service.events.driven_adapter.gateway.partner_pricing_gateway_impl import (
    PartnerPricingGatewayImpl,
)
from src.service.events.driven_adapter.model.spot_model import SpotModel
from src.service.events.driven_adapter.model.ticket_model import TicketModel
from src.service.events.driven_adapter.repo.event_command_repo_impl import EventCommandRepoImpl
from src.service.events.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl


pytestmark = pytest.mark.integration

CONCURRENT_BUYERS = 10


async def _count_tickets(database: Database, *, spot_id: str) -> int:
    async with database.session() as session:
        result = await session.execute(
            select(func.count()).select_from(TicketModel).where(TicketModel.spot_id == spot_id)
        )
        return result.scalar_one()


@pytest.fixture
async def event_with_spot(
    event_command_repo: EventCommandRepoImpl, make_event: Callable[..., EventEntity]
) -> tuple[EventEntity, SpotEntity]:
    event = make_event()
    await event_command_repo.create_event(event=event)
    spot = await event_command_repo.create_spot(spot=SpotEntity.create(event=event, name='A1'))
    return event, spot


@pytest.fixture
def reserve_use_case(
    event_query_repo: EventQueryRepoImpl, event_command_repo: EventCommandRepoImpl
) -> ReserveSpotUseCase:
    return ReserveSpotUseCase(
        event_query_repo=event_query_repo,
        event_command_repo=event_command_repo,
        partner_pricing_gateway=PartnerPricingGatewayImpl(base_urls={}, timeout=1.0),
    )


class TestCreate:
    async def test_duplicate_event_id_raises_repository_error(
        self, event_command_repo: EventCommandRepoImpl, make_event: Callable[..., EventEntity]
    ) -> None:
        event = make_event()
        await event_command_repo.create_event(event=event)

        with pytest.raises(RepositoryError) as exc_info:
            await event_command_repo.create_event(event=event)

        assert exc_info.value.kind == 'repository_error'
        assert 'create_event' in exc_info.value.message

    async def test_spot_of_missing_event_raises_repository_error(
        self, event_command_repo: EventCommandRepoImpl
    ) -> None:
        with pytest.raises(RepositoryError):
            await event_command_repo.create_spot(
                spot=SpotEntity(event_id='no-such-event', name='A1')
            )

    async def test_duplicate_spot_name_in_event_raises_repository_error(
        self,
        event_command_repo: EventCommandRepoImpl,
        event_with_spot: tuple[EventEntity, SpotEntity],
    ) -> None:
        event, _ = event_with_spot

        with pytest.raises(RepositoryError):
            await event_command_repo.create_spot(spot=SpotEntity.create(event=event, name='A1'))

    async def test_create_ticket_of_missing_spot_raises_repository_error(
        self,
        event_command_repo: EventCommandRepoImpl,
        event_with_spot: tuple[EventEntity, SpotEntity],
    ) -> None:
        event, _ = event_with_spot
        ghost = SpotEntity(event_id=event.id, name='Z9')
        ticket = TicketEntity.create(spot=ghost, ticket_type='full', base_price=Decimal('10'))

        with pytest.raises(RepositoryError):
            await event_command_repo.create_ticket(ticket=ticket)


class TestReserveSpot:
    async def test_reserve_available_spot(
        self,
        database: Database,
        event_command_repo: EventCommandRepoImpl,
        event_query_repo: EventQueryRepoImpl,
        event_with_spot: tuple[EventEntity, SpotEntity],
    ) -> None:
        # Arrange
        event, spot = event_with_spot
        ticket = TicketEntity.create(spot=spot, ticket_type='half', base_price=event.price)

        # Act
        sold = await event_command_repo.reserve_spot(spot_id=spot.id, ticket=ticket)

        # Assert
        assert sold.id == spot.id
        assert sold.status == SpotStatus.SOLD
        assert sold.ticket_id == ticket.id
        assert await _count_tickets(database, spot_id=spot.id) == 1

        stored = await event_query_repo.find_spot_by_id(event_id=event.id, spot_id=spot.id)
        assert stored == sold

    async def test_reserve_sold_spot_leaves_state_unchanged(
        self,
        database: Database,
        event_command_repo: EventCommandRepoImpl,
        event_query_repo: EventQueryRepoImpl,
        event_with_spot: tuple[EventEntity, SpotEntity],
    ) -> None:
        # Arrange
        event, spot = event_with_spot
        first = TicketEntity.create(spot=spot, ticket_type='full', base_price=event.price)
        second = TicketEntity.create(spot=spot, ticket_type='full', base_price=event.price)
        await event_command_repo.reserve_spot(spot_id=spot.id, ticket=first)

        # Act & Assert
        with pytest.raises(SpotAlreadyReservedError):
            await event_command_repo.reserve_spot(spot_id=spot.id, ticket=second)

        stored = await event_query_repo.find_spot_by_id(event_id=event.id, spot_id=spot.id)
        assert stored.ticket_id == first.id
        assert await _count_tickets(database, spot_id=spot.id) == 1

    async def test_reserve_unknown_spot_raises_conflict(
        self, event_command_repo: EventCommandRepoImpl
    ) -> None:
        # No row matches the conditional update, indistinguishable from a lost race
        ticket = TicketEntity(
            event_id='event-1', spot_id='missing', ticket_type='full', price=Decimal('1')
        )

        with pytest.raises(SpotAlreadyReservedError):
            await event_command_repo.reserve_spot(spot_id='missing', ticket=ticket)

    async def test_concurrent_reservations_have_exactly_one_winner(
        self,
        database: Database,
        event_command_repo: EventCommandRepoImpl,
        event_with_spot: tuple[EventEntity, SpotEntity],
    ) -> None:
        # Arrange
        event, spot = event_with_spot
        tickets = [
            TicketEntity.create(spot=spot, ticket_type='full', base_price=event.price)
            for _ in range(CONCURRENT_BUYERS)
        ]

        # Act
        results = await asyncio.gather(
            *(event_command_repo.reserve_spot(spot_id=spot.id, ticket=t) for t in tickets),
            return_exceptions=True,
        )

        # Assert
        winners = [r for r in results if isinstance(r, SpotEntity)]
        conflicts = [r for r in results if isinstance(r, SpotAlreadyReservedError)]
        assert len(winners) == 1
        assert len(conflicts) == CONCURRENT_BUYERS - 1
        assert winners[0].ticket_id in {t.id for t in tickets}
        assert await _count_tickets(database, spot_id=spot.id) == 1


class TestReserveSpotUseCaseOnSqlite:
    async def test_concurrent_buyers_through_use_case(
        self,
        database: Database,
        reserve_use_case: ReserveSpotUseCase,
        event_query_repo: EventQueryRepoImpl,
        event_with_spot: tuple[EventEntity, SpotEntity],
    ) -> None:
        # Arrange
        event, spot = event_with_spot

        # Act
        results = await asyncio.gather(
            *(
                reserve_use_case.reserve(event_id=event.id, spot_id=spot.id)
                for _ in range(CONCURRENT_BUYERS)
            ),
            return_exceptions=True,
        )

        # Assert
        errors = [r for r in results if isinstance(r, BaseException)]
        reservations = [r for r in results if not isinstance(r, BaseException)]
        assert len(reservations) == 1
        assert len(errors) == CONCURRENT_BUYERS - 1
        assert all(isinstance(e, SpotAlreadyReservedError) for e in errors)

        stored = await event_query_repo.find_event_by_id(event_id=event.id)
        assert [ticket.id for ticket in stored.tickets] == [reservations[0].ticket.id]
        assert stored.spots[0].ticket_id == reservations[0].ticket.id

    async def test_reserve_missing_spot_creates_no_ticket(
        self,
        database: Database,
        reserve_use_case: ReserveSpotUseCase,
        event_query_repo: EventQueryRepoImpl,
        event_with_spot: tuple[EventEntity, SpotEntity],
    ) -> None:
        event, _ = event_with_spot

        with pytest.raises(SpotNotFoundError):
            await reserve_use_case.reserve(event_id=event.id, spot_id='missing')

        stored = await event_query_repo.find_event_by_id(event_id=event.id)
        assert stored.tickets == []

    async def test_sold_then_free_spot_scenario(
        self,
        reserve_use_case: ReserveSpotUseCase,
        event_command_repo: EventCommandRepoImpl,
        event_query_repo: EventQueryRepoImpl,
        make_event: Callable[..., EventEntity],
    ) -> None:
        # Arrange: event E1 with spots A1 and B2
        event = make_event(name='E1')
        await event_command_repo.create_event(event=event)
        a1 = await event_command_repo.create_spot(spot=SpotEntity.create(event=event, name='A1'))
        b2 = await event_command_repo.create_spot(spot=SpotEntity.create(event=event, name='B2'))

        # Act & Assert: A1 is sold once
        first = await reserve_use_case.reserve(event_id=event.id, spot_id=a1.id)
        assert first.spot.status == SpotStatus.SOLD
        assert first.spot.ticket_id == first.ticket.id

        with pytest.raises(SpotAlreadyReservedError):
            await reserve_use_case.reserve(event_id=event.id, spot_id=a1.id)

        # B2 is unaffected
        second = await reserve_use_case.reserve(event_id=event.id, spot_id=b2.id)
        assert second.spot.name == 'B2'

        stored = await event_query_repo.find_event_by_id(event_id=event.id)
        assert {spot.name: spot.ticket_id for spot in stored.spots} == {
            'A1': first.ticket.id,
            'B2': second.ticket.id,
        }
        assert len(stored.tickets) == 2


class TestCancelledReservation:
    CANCELLED_ATTEMPTS = 9

    @pytest.fixture
    async def short_lock_database(self, tmp_path: Path) -> AsyncGenerator[Database, None]:
        # A leaked write lock shows up as "database is locked" after two seconds
        db = Database(db_url=f'sqlite+aiosqlite:///{tmp_path / "cancel.db"}', busy_timeout=2.0)
        await create_db_and_tables(db)
        yield db
        await db.dispose()

    @staticmethod
    async def _assert_spots_match_tickets(database: Database, spots: list[SpotEntity]) -> None:
        for spot in spots:
            async with database.session() as session:
                result = await session.execute(select(SpotModel).where(SpotModel.id == spot.id))
                spot_model = result.scalar_one()
                tickets = (
                    await session.execute(select(TicketModel).where(TicketModel.spot_id == spot.id))
                ).scalars().all()

            if spot_model.status == SpotStatus.SOLD.value:
                assert [ticket.id for ticket in tickets] == [spot_model.ticket_id]
            else:
                assert spot_model.status == SpotStatus.AVAILABLE.value
                assert spot_model.ticket_id is None
                assert tickets == []

    async def test_cancelled_reserve_spot_leaves_database_writable(
        self, short_lock_database: Database, make_event: Callable[..., EventEntity]
    ) -> None:
        # Arrange
        command_repo = EventCommandRepoImpl(session_factory=short_lock_database.session)
        event = make_event()
        await command_repo.create_event(event=event)
        spots = [
            await command_repo.create_spot(spot=SpotEntity.create(event=event, name=f'A{i}'))
            for i in range(1, self.CANCELLED_ATTEMPTS + 1)
        ]

        # Act: cancel each reservation a little later than the previous one
        for i, spot in enumerate(spots, start=1):
            ticket = TicketEntity.create(spot=spot, ticket_type='full', base_price=event.price)
            with anyio.move_on_after(0.0005 * i):
                await command_repo.reserve_spot(spot_id=spot.id, ticket=ticket)

        # Assert: the next writer is not blocked by a leftover transaction
        extra = await command_repo.create_spot(spot=SpotEntity.create(event=event, name='B1'))
        assert extra.name == 'B1'
        await self._assert_spots_match_tickets(short_lock_database, spots)

    async def test_timed_out_use_case_keeps_spot_and_ticket_consistent(
        self, short_lock_database: Database, make_event: Callable[..., EventEntity]
    ) -> None:
        # Arrange
        command_repo = EventCommandRepoImpl(session_factory=short_lock_database.session)
        use_case = ReserveSpotUseCase(
            event_query_repo=EventQueryRepoImpl(session_factory=short_lock_database.session),
            event_command_repo=command_repo,
            partner_pricing_gateway=PartnerPricingGatewayImpl(base_urls={}, timeout=1.0),
        )
        event = make_event()
        await command_repo.create_event(event=event)
        spots = [
            await command_repo.create_spot(spot=SpotEntity.create(event=event, name=f'C{i}'))
            for i in range(1, self.CANCELLED_ATTEMPTS + 1)
        ]

        # Act
        for i, spot in enumerate(spots, start=1):
            try:
                await use_case.reserve(event_id=event.id, spot_id=spot.id, timeout=0.0005 * i)
            except StorageTimeoutError:
                pass

        # Assert
        await command_repo.create_spot(spot=SpotEntity.create(event=event, name='D1'))
        await self._assert_spots_match_tickets(short_lock_database, spots)
