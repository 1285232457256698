import time
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import IntegrityError

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.enum.user_role import UserRole
from src.service.ticket_reservation.domain.value_object.ticket_selection import TicketSelection


class CreateReservationUseCase:
    """
    Claim tickets for a customer.

    Flow:
    1. Validate every selection and resolve the full ticket set (no writes yet)
    2. Insert the reservation (pending)
    3. Flip each ticket available -> booked with a conditional update;
       0 rows matched means another customer won the ticket -> Conflict
    4. Link the tickets and commit; any failure rolls the whole thing back
    """

    def __init__(self, *, uow: AbstractUnitOfWork, max_tickets_per_selection: int = 10) -> None:
        self.uow = uow
        self.max_tickets_per_selection = max_tickets_per_selection
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, max_tickets_per_selection=settings.MAX_TICKETS_PER_SELECTION)

    @Logger.io
    async def execute(
        self, *, principal: Principal, selections: List[TicketSelection]
    ) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.create_reservation',
            attributes={
                'user.id': principal.user_id,
                'reservation.selection_count': len(selections),
            },
        ):
            if principal.role != UserRole.CUSTOMER:
                metrics.record_reservation(result='forbidden')
                raise ForbiddenError('Only customers can create reservations')

            TicketSelection.validate_all(selections, max_quantity=self.max_tickets_per_selection)

            started = time.perf_counter()
            try:
                reservation = await self._reserve(
                    customer_id=principal.user_id, selections=selections
                )
            except NotFoundError:
                metrics.record_reservation(result='not_found')
                raise
            except (ConflictError, IntegrityError):
                metrics.record_reservation(result='conflict')
                raise

            metrics.record_reservation(result='created', duration=time.perf_counter() - started)
            Logger.base.info(
                f'🎫 [RESERVATION] Created reservation {reservation.id} for user '
                f'{principal.user_id} with tickets {[t.id for t in reservation.tickets]}'
            )
            return reservation

    async def _reserve(self, *, customer_id: int, selections: List[TicketSelection]) -> Reservation:
        async with self.uow:
            ticket_ids = await self._resolve_ticket_ids(
                customer_id=customer_id, selections=selections
            )

            created = await self.uow.reservations.create(
                reservation=Reservation(user_id=customer_id)
            )
            assert created.id is not None

            for ticket_id in ticket_ids:
                if not await self.uow.tickets.claim(ticket_id=ticket_id):
                    Logger.base.warning(
                        f'⚠️ [RESERVATION] Ticket {ticket_id} raced away, rolling back'
                    )
                    raise ConflictError(f'Ticket {ticket_id} is no longer available')

            await self.uow.reservations.link_tickets(
                reservation_id=created.id, ticket_ids=ticket_ids
            )
            reservation = await self.uow.reservations.get_by_id(reservation_id=created.id)
            await self.uow.commit()

        assert reservation is not None
        return reservation

    async def _resolve_ticket_ids(
        self, *, customer_id: int, selections: List[TicketSelection]
    ) -> List[int]:
        requested_ids = {s.ticket_id for s in selections}
        resolved: List[int] = []

        for selection in selections:
            ticket = await self.uow.tickets.get_by_id(ticket_id=selection.ticket_id)
            if ticket is None:
                raise NotFoundError(f'Ticket {selection.ticket_id} not found')
            if await self.uow.events.get_by_id(event_id=ticket.event_id) is None:
                raise NotFoundError(f'Event {ticket.event_id} not found')

            if await self.uow.reservations.user_holds_ticket(
                user_id=customer_id, ticket_id=selection.ticket_id
            ):
                raise ConflictError(
                    f'You already have a reservation for ticket {selection.ticket_id}'
                )
            if not ticket.is_available:
                raise ConflictError(f'Ticket {selection.ticket_id} is not available')

            extra_needed = selection.quantity - 1
            tier_mates = await self.uow.tickets.find_available_in_tier(
                event_id=ticket.event_id,
                price=ticket.price,
                exclude_ids=requested_ids | set(resolved),
                limit=extra_needed,
            )
            if len(tier_mates) < extra_needed:
                raise ConflictError(
                    f'Only {len(tier_mates) + 1} ticket(s) available at the price of '
                    f'ticket {selection.ticket_id}, requested {selection.quantity}'
                )

            resolved.append(selection.ticket_id)
            resolved.extend(t.id for t in tier_mates if t.id is not None)

        return resolved
