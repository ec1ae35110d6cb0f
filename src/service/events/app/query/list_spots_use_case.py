from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.events.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.events.domain.entity.spot_entity import SpotEntity


class ListSpotsUseCase:
    def __init__(self, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @Logger.io
    async def list_by_event(self, *, event_id: str) -> List[SpotEntity]:
        """
        Spots of an event ordered by name.

        Raises:
            EventNotFoundError: unknown event (an existing event without spots gives [])
        """
        event = await self.event_query_repo.find_event_row_by_id(event_id=event_id)
        spots = await self.event_query_repo.find_spots_by_event_id(event_id=event.id)

        Logger.base.info(f'📋 [LIST_SPOTS] Found {len(spots)} spots for event {event_id}')
        return spots
