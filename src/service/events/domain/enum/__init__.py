"""Event Spot Sales Domain Enums"""

from src.service.events.domain.enum.rating import Rating
from src.service.events.domain.enum.spot_status import SpotStatus
from src.service.events.domain.enum.ticket_type import TicketType

__all__ = ['Rating', 'SpotStatus', 'TicketType']
