"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.events.app.command import create_spots_use_case, reserve_spot_use_case
from src.service.events.app.query import (
    get_event_use_case,
    list_events_use_case,
    list_spots_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    reserve_spot_use_case,
    create_spots_use_case,
    list_events_use_case,
    get_event_use_case,
    list_spots_use_case,
]
