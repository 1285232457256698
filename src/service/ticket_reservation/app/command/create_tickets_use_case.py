from decimal import Decimal
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.entity.ticket_entity import (
    TicketEntity,
    normalize_price,
)
from src.service.ticket_reservation.domain.enum.user_role import UserRole


class CreateTicketsUseCase:
    """Bulk-create available tickets of one price tier for an event."""

    def __init__(self, *, uow: AbstractUnitOfWork, max_tickets_per_bulk_create: int = 500) -> None:
        self.uow = uow
        self.max_tickets_per_bulk_create = max_tickets_per_bulk_create
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, max_tickets_per_bulk_create=settings.MAX_TICKETS_PER_BULK_CREATE)

    @Logger.io
    async def execute(
        self, *, principal: Principal, event_id: int, price: Decimal, count: int = 1
    ) -> List[TicketEntity]:
        if principal.role not in (UserRole.ORGANIZER, UserRole.ADMIN):
            raise ForbiddenError('Only organizers and admins can create tickets')

        ticket_price = normalize_price(price)
        if not 1 <= count <= self.max_tickets_per_bulk_create:
            raise ValidationError.for_field(
                ['count'], f'Count must be between 1 and {self.max_tickets_per_bulk_create}'
            )

        with self.tracer.start_as_current_span(
            'use_case.create_tickets',
            attributes={'event.id': event_id, 'ticket.count': count},
        ):
            async with self.uow:
                event = await self.uow.events.get_by_id(event_id=event_id)
                if event is None:
                    raise NotFoundError('Event not found')
                if principal.role == UserRole.ORGANIZER and not event.is_owned_by(
                    principal.user_id
                ):
                    raise ForbiddenError('You can only add tickets to your own events')

                tickets = await self.uow.tickets.create_batch(
                    event_id=event_id, price=ticket_price, count=count
                )
                await self.uow.commit()

            Logger.base.info(
                f'🎟️ [TICKETS] Created {len(tickets)} tickets at {ticket_price} for event {event_id}'
            )
            return tickets
