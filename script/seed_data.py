#!/usr/bin/env python3
"""
Database Seed Script
Populate sample events and spots into the database

Features:
1. Create Events - two events, one priced locally and one priced by partner 1
2. Create Spots - generate named spots (A1..A10, B1..) for each event

Notes:
- Run `python -m script.reset_database` first for a clean schema
- SPOTS env var sets the number of spots per event (default 20)
"""

import asyncio
import os
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.platform.config.di import container
from src.service.events.app.command.create_spots_use_case import CreateSpotsUseCase
from src.service.events.domain.entity.event_entity import EventEntity
from src.service.events.domain.enum.rating import Rating


@dataclass
class EventConfig:
    """Event seed configuration"""

    name: str
    location: str
    organization: str
    rating: Rating
    date: datetime
    image_url: str
    price: Decimal
    partner_id: int


SAMPLE_EVENTS = [
    EventConfig(
        name='Summer Festival',
        location='Riverside Park',
        organization='City Events',
        rating=Rating.FOUR_STAR,
        date=datetime(2025, 7, 12, 20, 0, 0),
        image_url='https://images.example.com/summer-festival.png',
        price=Decimal('120.00'),
        partner_id=1,
    ),
    EventConfig(
        name='Jazz Night',
        location='Blue Hall',
        organization='Jazz Club',
        rating=Rating.THREE_STAR,
        date=datetime(2025, 9, 3, 21, 30, 0),
        image_url='https://images.example.com/jazz-night.png',
        price=Decimal('80.00'),
        partner_id=2,
    ),
]


async def create_events(number_of_spots: int) -> None:
    print(f'🎫 Creating {len(SAMPLE_EVENTS)} events with {number_of_spots} spots each...')

    event_command_repo = container.event_command_repo()
    create_spots_use_case = CreateSpotsUseCase(
        event_query_repo=container.event_query_repo(),
        event_command_repo=event_command_repo,
    )

    for config in SAMPLE_EVENTS:
        event = EventEntity(
            name=config.name,
            location=config.location,
            organization=config.organization,
            rating=config.rating,
            date=config.date,
            image_url=config.image_url,
            capacity=number_of_spots,
            price=config.price,
            partner_id=config.partner_id,
        )
        await event_command_repo.create_event(event=event)
        spots = await create_spots_use_case.create_spots(
            event_id=event.id, number_of_spots=number_of_spots
        )
        print(f'   ✅ Created event: ID={event.id}, Name={event.name}, Spots={len(spots)}')


async def verify_data() -> None:
    """Verify seeded data"""
    print('🔍 Verifying seeded data...')

    events = await container.event_query_repo().list_events()
    for event in events:
        print(
            f'      Event ID={event.id}, Name={event.name}, '
            f'Spots={len(event.spots)}, Tickets={len(event.tickets)}'
        )

    print('   ✅ Data verification completed!')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = container.database()
    try:
        await create_events(number_of_spots=int(os.getenv('SPOTS', '20')))
        print()
        await verify_data()

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1) from e

    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
