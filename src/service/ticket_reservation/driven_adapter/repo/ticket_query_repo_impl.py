from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticket_reservation.domain.entity.event_entity import EventEntity
from src.service.ticket_reservation.domain.entity.ticket_entity import TicketEntity
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from src.service.ticket_reservation.driven_adapter.model.event_model import EventModel
from src.service.ticket_reservation.driven_adapter.model.reservation_ticket_model import (
    ReservationTicketModel,
)
from src.service.ticket_reservation.driven_adapter.model.ticket_model import TicketModel
from src.service.ticket_reservation.driven_adapter.repo.model_mapper import (
    to_event_entity,
    to_ticket_entity,
)


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_event(self, *, event_id: int) -> EventEntity | None:
        async with self.session_factory() as session:
            db_event = await session.scalar(select(EventModel).where(EventModel.id == event_id))
            return to_event_entity(db_event) if db_event else None

    @Logger.io
    async def list_by_event(
        self, *, event_id: int, status: Optional[TicketStatus] = None
    ) -> List[TicketEntity]:
        stmt = (
            select(TicketModel, ReservationTicketModel.reservation_id)
            .outerjoin(ReservationTicketModel, ReservationTicketModel.ticket_id == TicketModel.id)
            .where(TicketModel.event_id == event_id)
            .order_by(TicketModel.id)
        )
        if status is not None:
            stmt = stmt.where(TicketModel.status == status)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [
                to_ticket_entity(db_ticket, reservation_id)
                for db_ticket, reservation_id in result.all()
            ]
