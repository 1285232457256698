"""
Ticket Command Repository Implementation

claim(), release() and mark_booked() are the only writers of ticket.status.
All are conditional UPDATEs. release() and mark_booked() only reach tickets
still linked to the given reservation, whatever the caller read earlier.
"""

from decimal import Decimal
from typing import List

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_ticket_command_repo import (
    ITicketCommandRepo,
)
from src.service.ticket_reservation.domain.entity.ticket_entity import TicketEntity
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from src.service.ticket_reservation.driven_adapter.model.reservation_ticket_model import (
    ReservationTicketModel,
)
from src.service.ticket_reservation.driven_adapter.model.ticket_model import TicketModel
from src.service.ticket_reservation.driven_adapter.repo.model_mapper import to_ticket_entity


def _linked_to(reservation_id: int) -> ColumnElement[bool]:
    return TicketModel.id.in_(
        select(ReservationTicketModel.ticket_id).where(
            ReservationTicketModel.reservation_id == reservation_id
        )
    )


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, ticket_id: int) -> TicketEntity | None:
        db_ticket = await self.session.scalar(
            select(TicketModel)
            .where(TicketModel.id == ticket_id)
            .execution_options(populate_existing=True)
        )
        return to_ticket_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def find_available_in_tier(
        self, *, event_id: int, price: Decimal, exclude_ids: set[int], limit: int
    ) -> List[TicketEntity]:
        if limit <= 0:
            return []
        stmt = (
            select(TicketModel)
            .where(
                TicketModel.event_id == event_id,
                TicketModel.price == price,
                TicketModel.status == TicketStatus.AVAILABLE,
            )
            .order_by(TicketModel.id)
            .limit(limit)
        )
        if exclude_ids:
            stmt = stmt.where(TicketModel.id.notin_(exclude_ids))
        result = await self.session.scalars(stmt)
        return [to_ticket_entity(t) for t in result.all()]

    @Logger.io
    async def claim(self, *, ticket_id: int) -> bool:
        result = await self.session.execute(
            update(TicketModel)
            .where(TicketModel.id == ticket_id, TicketModel.status == TicketStatus.AVAILABLE)
            .values(status=TicketStatus.BOOKED)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def release(self, *, reservation_id: int, ticket_ids: List[int]) -> List[int]:
        if not ticket_ids:
            return []
        result = await self.session.execute(
            update(TicketModel)
            .where(
                TicketModel.id.in_(ticket_ids),
                TicketModel.status == TicketStatus.BOOKED,
                _linked_to(reservation_id),
            )
            .values(status=TicketStatus.AVAILABLE)
            .returning(TicketModel.id)
            .execution_options(synchronize_session=False)
        )
        return sorted(result.scalars().all())

    @Logger.io
    async def mark_booked(self, *, reservation_id: int) -> None:
        await self.session.execute(
            update(TicketModel)
            .where(_linked_to(reservation_id), TicketModel.status != TicketStatus.BOOKED)
            .values(status=TicketStatus.BOOKED)
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def create_batch(
        self, *, event_id: int, price: Decimal, count: int
    ) -> List[TicketEntity]:
        db_tickets = [
            TicketModel(event_id=event_id, price=price, status=TicketStatus.AVAILABLE)
            for _ in range(count)
        ]
        self.session.add_all(db_tickets)
        await self.session.flush()
        # reload to pick up server-side timestamps
        result = await self.session.scalars(
            select(TicketModel)
            .where(TicketModel.id.in_([t.id for t in db_tickets]))
            .order_by(TicketModel.id)
            .execution_options(populate_existing=True)
        )
        return [to_ticket_entity(t) for t in result.all()]
