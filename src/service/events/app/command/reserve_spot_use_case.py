import time
from decimal import Decimal
from typing import Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import CustomBaseError, StorageTimeoutError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.events.app.dto.reservation_result import ReservationResult
from src.service.events.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.events.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.events.app.interface.i_partner_pricing_gateway import IPartnerPricingGateway
from src.service.events.domain.entity.event_entity import EventEntity
from src.service.events.domain.entity.ticket_entity import TicketEntity, to_ticket_type
from src.service.events.domain.enum.ticket_type import TicketType
from src.service.events.domain.errors import SpotAlreadyReservedError


class ReserveSpotUseCase:
    """
    Reserve one spot of an event and issue its ticket.

    The decision is made by the command repo's conditional update, not by the
    availability read below: that read only turns obvious failures (unknown or
    already sold spot) into errors before any pricing work. Among concurrent
    callers for the same spot exactly one commits, the others get
    SpotAlreadyReservedError. Nothing is retried.
    """

    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        event_command_repo: IEventCommandRepo,
        partner_pricing_gateway: IPartnerPricingGateway,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.event_command_repo = event_command_repo
        self.partner_pricing_gateway = partner_pricing_gateway
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        partner_pricing_gateway: IPartnerPricingGateway = Depends(
            Provide[Container.partner_pricing_gateway]
        ),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            event_command_repo=event_command_repo,
            partner_pricing_gateway=partner_pricing_gateway,
        )

    @Logger.io
    async def reserve(
        self,
        *,
        event_id: str,
        spot_id: str,
        ticket_type: TicketType | str = TicketType.FULL,
        timeout: float | None = None,
    ) -> ReservationResult:
        """
        Flow:
        1. Look up the spot (unknown -> SpotNotFoundError, sold -> SpotAlreadyReservedError)
        2. Price the ticket from the event price or the event's partner
        3. Conditionally mark the spot sold and insert the ticket (one transaction)

        Raises:
            StorageTimeoutError: the whole flow did not finish within `timeout` seconds
        """
        ticket_type = to_ticket_type(ticket_type)
        timeout = settings.RESERVATION_TIMEOUT_SECONDS if timeout is None else timeout
        start_time = time.perf_counter()
        result = 'error'

        with self.tracer.start_as_current_span(
            'use_case.reserve_spot',
            attributes={'event.id': event_id, 'spot.id': spot_id, 'ticket.type': ticket_type.value},
        ):
            try:
                Logger.base.info(f'🎯 [RESERVE] Reserving spot {spot_id} of event {event_id}')
                try:
                    with anyio.fail_after(timeout):
                        reservation = await self._reserve(
                            event_id=event_id, spot_id=spot_id, ticket_type=ticket_type
                        )
                except TimeoutError as e:
                    raise StorageTimeoutError(
                        f'reservation of spot {spot_id} timed out after {timeout}s'
                    ) from e

                result = 'success'
                Logger.base.info(
                    f'✅ [RESERVE] Spot {reservation.spot.name} sold, '
                    f'ticket {reservation.ticket.id}'
                )
                return reservation
            except CustomBaseError as e:
                result = e.kind
                raise
            finally:
                metrics.record_spot_reservation(
                    ticket_type=ticket_type.value,
                    result=result,
                    duration=time.perf_counter() - start_time,
                )

    async def _reserve(
        self, *, event_id: str, spot_id: str, ticket_type: TicketType
    ) -> ReservationResult:
        spot = await self.event_query_repo.find_spot_by_id(event_id=event_id, spot_id=spot_id)
        if not spot.is_available:
            Logger.base.warning(f'⚠️ [RESERVE] Spot {spot.name} ({spot_id}) already sold')
            raise SpotAlreadyReservedError(spot_id)

        event = await self.event_query_repo.find_event_row_by_id(event_id=event_id)
        base_price = await self._resolve_base_price(event)

        ticket = TicketEntity.create(spot=spot, ticket_type=ticket_type, base_price=base_price)
        sold_spot = await self.event_command_repo.reserve_spot(spot_id=spot.id, ticket=ticket)

        return ReservationResult(spot=sold_spot, ticket=ticket)

    async def _resolve_base_price(self, event: EventEntity) -> Decimal:
        partner_price = await self.partner_pricing_gateway.quote_full_price(
            partner_id=event.partner_id, event_id=event.id
        )
        return event.price if partner_price is None else partner_price
