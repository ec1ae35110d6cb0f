from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.events.app.command.reserve_spot_use_case import ReserveSpotUseCase
from src.service.events.app.query.get_event_use_case import GetEventUseCase
from src.service.events.app.query.list_events_use_case import ListEventsUseCase
from src.service.events.app.query.list_spots_use_case import ListSpotsUseCase
from src.service.events.driving_adapter.schema.event_schema import (
    EventResponse,
    ReservationResponse,
    ReserveSpotRequest,
    SpotResponse,
    TicketResponse,
)


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_events()
    return [EventResponse.from_entity(event) for event in events]


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: str,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event = await use_case.get_by_id(event_id=event_id)
    return EventResponse.from_entity(event)


@router.get('/{event_id}/spots', status_code=status.HTTP_200_OK)
@Logger.io
async def list_spots(
    event_id: str,
    use_case: ListSpotsUseCase = Depends(ListSpotsUseCase.depends),
) -> List[SpotResponse]:
    spots = await use_case.list_by_event(event_id=event_id)
    return [SpotResponse.from_entity(spot) for spot in spots]


@router.post('/{event_id}/spots/{spot_id}/reserve', status_code=status.HTTP_200_OK)
@Logger.io
async def reserve_spot(
    event_id: str,
    spot_id: str,
    request: Optional[ReserveSpotRequest] = Body(default=None),
    use_case: ReserveSpotUseCase = Depends(ReserveSpotUseCase.depends),
) -> ReservationResponse:
    """Reserve one spot; the body is optional and defaults to a full ticket."""
    ticket_type = (request or ReserveSpotRequest()).ticket_type
    reservation = await use_case.reserve(
        event_id=event_id, spot_id=spot_id, ticket_type=ticket_type
    )
    return ReservationResponse(
        spot=SpotResponse.from_entity(reservation.spot),
        ticket=TicketResponse.from_entity(reservation.ticket),
    )
