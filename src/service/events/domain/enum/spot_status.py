"""
Spot Status Enum - Domain Value Object

A spot is created AVAILABLE and moves to SOLD exactly once.
"""

from enum import StrEnum


class SpotStatus(StrEnum):
    AVAILABLE = 'available'
    SOLD = 'sold'
