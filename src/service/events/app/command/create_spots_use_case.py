"""
Create Spots Use Case

Generates the seating spots of an existing event: A1..A10, B1..B10, ...
Numbering continues after the spots the event already has.
"""

from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.events.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.events.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.events.domain.entity.spot_entity import SpotEntity, generate_spot_name
from src.service.events.domain.errors import InvalidSpotNumberError


class CreateSpotsUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        event_command_repo: IEventCommandRepo,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.event_command_repo = event_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, event_command_repo=event_command_repo)

    @Logger.io
    async def create_spots(self, *, event_id: str, number_of_spots: int) -> List[SpotEntity]:
        if number_of_spots <= 0:
            raise InvalidSpotNumberError()

        event = await self.event_query_repo.find_event_by_id(event_id=event_id)
        first_index = len(event.spots)

        spots = []
        for index in range(first_index, first_index + number_of_spots):
            spot = SpotEntity.create(event=event, name=generate_spot_name(index))
            spots.append(await self.event_command_repo.create_spot(spot=spot))

        metrics.record_spots_created(count=len(spots))
        Logger.base.info(f'🪑 [CREATE_SPOTS] Created {len(spots)} spots for event {event_id}')
        return spots
