from decimal import Decimal
from typing import List

from pydantic import BaseModel

from src.service.events.domain.entity.event_entity import EVENT_DATE_FORMAT, EventEntity
from src.service.events.domain.entity.spot_entity import SpotEntity
from src.service.events.domain.entity.ticket_entity import TicketEntity
from src.service.events.domain.enum.ticket_type import TicketType


class SpotResponse(BaseModel):
    id: str
    event_id: str
    name: str
    status: str
    ticket_id: str

    class Config:
        json_schema_extra = {
            'example': {
                'id': '0192b6e0-7c1a-7d2e-9a51-5b3c8f1e2a10',
                'event_id': '0192b6e0-7a00-7c11-8d3e-1f2a3b4c5d6e',
                'name': 'A1',
                'status': 'sold',
                'ticket_id': '0192b6e1-0b2c-7f00-a1b2-c3d4e5f60718',
            }
        }

    @classmethod
    def from_entity(cls, spot: SpotEntity) -> 'SpotResponse':
        return cls(
            id=spot.id,
            event_id=spot.event_id,
            name=spot.name,
            status=spot.status.value,
            ticket_id=spot.ticket_id,
        )


class TicketResponse(BaseModel):
    id: str
    event_id: str
    spot_id: str
    ticket_type: str
    price: Decimal

    class Config:
        json_schema_extra = {
            'example': {
                'id': '0192b6e1-0b2c-7f00-a1b2-c3d4e5f60718',
                'event_id': '0192b6e0-7a00-7c11-8d3e-1f2a3b4c5d6e',
                'spot_id': '0192b6e0-7c1a-7d2e-9a51-5b3c8f1e2a10',
                'ticket_type': 'full',
                'price': '120.00',
            }
        }

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            event_id=ticket.event_id,
            spot_id=ticket.spot_id,
            ticket_type=ticket.ticket_type.value,
            price=ticket.price,
        )


class EventResponse(BaseModel):
    id: str
    name: str
    location: str
    organization: str
    rating: str
    date: str
    image_url: str
    capacity: int
    price: Decimal
    partner_id: int
    spots: List[SpotResponse] = []
    tickets: List[TicketResponse] = []

    class Config:
        json_schema_extra = {
            'example': {
                'id': '0192b6e0-7a00-7c11-8d3e-1f2a3b4c5d6e',
                'name': 'Summer Festival',
                'location': 'Riverside Park',
                'organization': 'City Events',
                'rating': 'four_star',
                'date': '2025-07-12 20:00:00',
                'image_url': 'https://example.com/festival.png',
                'capacity': 20,
                'price': '120.00',
                'partner_id': 1,
                'spots': [],
                'tickets': [],
            }
        }

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        return cls(
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
            spots=[SpotResponse.from_entity(spot) for spot in event.spots],
            tickets=[TicketResponse.from_entity(ticket) for ticket in event.tickets],
        )


class ReserveSpotRequest(BaseModel):
    ticket_type: TicketType = TicketType.FULL

    class Config:
        json_schema_extra = {'example': {'ticket_type': 'half'}}


class ReservationResponse(BaseModel):
    spot: SpotResponse
    ticket: TicketResponse
