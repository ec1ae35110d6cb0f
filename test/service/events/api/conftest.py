"""
API test configuration.

Each test gets a fresh SQLite file seeded with one event (spots A1 and B2) and
a FastAPI app whose DI container points at that file. The app lifespan wires
the use case modules and disposes the engine inside the TestClient loop.
"""

import asyncio
from collections.abc import AsyncIterator, Generator
from contextlib import asynccontextmanager
from pathlib import Path

import attrs
from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import Database, create_db_and_tables
from src.service.events.app.command.create_spots_use_case import CreateSpotsUseCase
from src.service.events.app.interface.i_partner_pricing_gateway import IPartnerPricingGateway
from src.service.events.domain.entity.event_entity import EventEntity
from src.service.events.domain.entity.spot_entity import SpotEntity
from src.service.events.driven_adapter.gateway.partner_pricing_gateway_impl import (
    PartnerPricingGatewayImpl,
)
from src.service.events.driven_adapter.repo.event_command_repo_impl import EventCommandRepoImpl
from src.service.events.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl


@attrs.frozen
class SeededEvent:
    db_url: str
    event: EventEntity
    spots: dict[str, SpotEntity]


@asynccontextmanager
async def _test_lifespan(app: FastAPI) -> AsyncIterator[None]:
    container.wire(modules=WIRE_MODULES)
    yield
    await container.database().dispose()
    container.unwire()


async def _seed(db_url: str, event: EventEntity) -> list[SpotEntity]:
    database = Database(db_url=db_url)
    try:
        await create_db_and_tables(database)
        command_repo = EventCommandRepoImpl(session_factory=database.session)
        await command_repo.create_event(event=event)
        a1 = await command_repo.create_spot(spot=SpotEntity.create(event=event, name='A1'))
        b2 = await command_repo.create_spot(spot=SpotEntity.create(event=event, name='B2'))
        # One generated spot through the use case: names continue after A1/B2 -> A3
        generated = await CreateSpotsUseCase(
            event_query_repo=EventQueryRepoImpl(session_factory=database.session),
            event_command_repo=command_repo,
        ).create_spots(event_id=event.id, number_of_spots=1)
        return [a1, b2, *generated]
    finally:
        await database.dispose()


@pytest.fixture
def partner_pricing_gateway() -> IPartnerPricingGateway:
    return PartnerPricingGatewayImpl(base_urls={}, timeout=1.0)


@pytest.fixture
def seeded_event(tmp_path: Path, make_event) -> SeededEvent:
    db_url = f'sqlite+aiosqlite:///{tmp_path / "api.db"}'
    event = make_event(name='E1', partner_id=1)
    spots = asyncio.run(_seed(db_url, event))
    return SeededEvent(db_url=db_url, event=event, spots={spot.name: spot for spot in spots})


@pytest.fixture
def client(
    seeded_event: SeededEvent, partner_pricing_gateway: IPartnerPricingGateway
) -> Generator[TestClient, None, None]:
    container.database.override(providers.Singleton(Database, db_url=seeded_event.db_url))
    container.partner_pricing_gateway.override(providers.Object(partner_pricing_gateway))
    container.reset_singletons()

    app = create_app(lifespan=_test_lifespan, title_suffix=' (Test)')
    with TestClient(app) as test_client:
        yield test_client

    container.partner_pricing_gateway.reset_override()
    container.database.reset_override()
    container.reset_singletons()
