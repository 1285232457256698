from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticket_reservation.domain.entity.ticket_entity import TicketEntity
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus


class ListEventTicketsUseCase:
    def __init__(self, ticket_query_repo: ITicketQueryRepo):
        self.ticket_query_repo = ticket_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
    ) -> Self:
        return cls(ticket_query_repo=ticket_query_repo)

    @Logger.io
    async def list_tickets(
        self, *, event_id: int, status: Optional[TicketStatus] = None
    ) -> List[TicketEntity]:
        if await self.ticket_query_repo.get_event(event_id=event_id) is None:
            raise NotFoundError('Event not found')
        return await self.ticket_query_repo.list_by_event(event_id=event_id, status=status)
