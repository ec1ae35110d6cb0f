"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.events.driven_adapter.model.event_model import EventModel
from src.service.events.driven_adapter.model.spot_model import SpotModel
from src.service.events.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'EventModel',
    'SpotModel',
    'TicketModel',
]
