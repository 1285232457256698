from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from src.service.ticket_reservation.domain.value_object.cancellation_result import (
    CancellationResult,
)


class CancelReservationUseCase:
    """
    Release tickets of a reservation back to inventory.

    - quantity given: release up to that many booked tickets (lowest id first)
    - quantity omitted: release every linked ticket
    The reservation becomes cancelled only when no linked ticket remains;
    a partial release keeps its status.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self, *, principal: Principal, reservation_id: int, quantity: Optional[int] = None
    ) -> CancellationResult:
        if quantity is not None and quantity < 1:
            raise ValidationError.for_field(['quantity'], 'Quantity must be at least 1')

        with self.tracer.start_as_current_span(
            'use_case.cancel_reservation',
            attributes={
                'user.id': principal.user_id,
                'reservation.id': reservation_id,
                'cancel.quantity': quantity or 0,
            },
        ):
            async with self.uow:
                reservation = await self.uow.reservations.get_by_id(
                    reservation_id=reservation_id
                )
                if reservation is None:
                    raise NotFoundError('Reservation not found')

                reservation.validate_can_be_cancelled_by(principal)
                event_id = reservation.event_id

                if quantity is None:
                    release_ids = [t.id for t in reservation.tickets if t.id is not None]
                else:
                    booked = [
                        t.id
                        for t in reservation.tickets
                        if t.id is not None and t.status == TicketStatus.BOOKED
                    ]
                    release_ids = booked[:quantity]

                released_ids = await self.uow.tickets.release(
                    reservation_id=reservation_id, ticket_ids=release_ids
                )
                if len(released_ids) != len(release_ids):
                    Logger.base.warning(
                        f'⚠️ [CANCEL] Reservation {reservation_id}: selected {release_ids}, '
                        f'released {released_ids}'
                    )
                await self.uow.reservations.unlink_tickets(
                    reservation_id=reservation_id, ticket_ids=released_ids
                )

                remaining = await self.uow.reservations.count_linked_tickets(
                    reservation_id=reservation_id
                )
                if remaining == 0:
                    if not await self.uow.reservations.transition_status(
                        reservation_id=reservation_id, to_status=ReservationStatus.CANCELLED
                    ):
                        raise ConflictError('Reservation is already cancelled')
                    updated = reservation.cancel()
                else:
                    updated = reservation.without_tickets(set(released_ids))

                await self.uow.commit()

            kind = 'full' if updated.is_cancelled else 'partial'
            metrics.record_release(kind=kind, count=len(released_ids))
            Logger.base.info(
                f'🔓 [CANCEL] Reservation {reservation_id}: released tickets {released_ids}, '
                f'{remaining} remaining, status {updated.status}'
            )
            return CancellationResult(
                reservation=updated, event_id=event_id, released_ticket_ids=released_ids
            )
