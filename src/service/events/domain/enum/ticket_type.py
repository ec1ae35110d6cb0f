from enum import StrEnum


class TicketType(StrEnum):
    HALF = 'half'
    FULL = 'full'
