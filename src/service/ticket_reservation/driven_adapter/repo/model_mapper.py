"""
Model -> entity conversion shared by the command and query repositories.
"""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.service.ticket_reservation.domain.entity.event_entity import EventEntity
from src.service.ticket_reservation.domain.entity.payment_entity import Payment
from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.entity.ticket_entity import TicketEntity
from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from src.service.ticket_reservation.driven_adapter.model import (
    EventModel,
    PaymentModel,
    ReservationModel,
    ReservationTicketModel,
    TicketModel,
)


def to_event_entity(db_event: EventModel) -> EventEntity:
    return EventEntity(
        id=db_event.id,
        name=db_event.name,
        organizer_id=db_event.organizer_id,
        created_at=db_event.created_at,
    )


def to_ticket_entity(db_ticket: TicketModel, reservation_id: Optional[int] = None) -> TicketEntity:
    return TicketEntity(
        id=db_ticket.id,
        event_id=db_ticket.event_id,
        price=db_ticket.price,
        status=TicketStatus(db_ticket.status),
        reservation_id=reservation_id,
        created_at=db_ticket.created_at,
        updated_at=db_ticket.updated_at,
    )


def to_payment_entity(db_payment: PaymentModel) -> Payment:
    return Payment(
        id=db_payment.id,
        reservation_id=db_payment.reservation_id,
        amount=db_payment.amount,
        status=PaymentStatus(db_payment.status),
        created_at=db_payment.created_at,
        updated_at=db_payment.updated_at,
    )


async def load_reservations(
    session: AsyncSession, db_reservations: Sequence[ReservationModel]
) -> list[Reservation]:
    """Attach linked tickets and the payment to each reservation row (2 extra queries)."""
    ids = [r.id for r in db_reservations]
    if not ids:
        return []

    ticket_rows = await session.execute(
        select(ReservationTicketModel.reservation_id, TicketModel)
        .join(TicketModel, TicketModel.id == ReservationTicketModel.ticket_id)
        .where(ReservationTicketModel.reservation_id.in_(ids))
        .order_by(TicketModel.id)
        .execution_options(populate_existing=True)
    )
    tickets_by_reservation: dict[int, list[TicketEntity]] = {rid: [] for rid in ids}
    for reservation_id, db_ticket in ticket_rows.all():
        tickets_by_reservation[reservation_id].append(to_ticket_entity(db_ticket, reservation_id))

    payment_rows = await session.scalars(
        select(PaymentModel)
        .where(PaymentModel.reservation_id.in_(ids))
        .execution_options(populate_existing=True)
    )
    payments = {p.reservation_id: to_payment_entity(p) for p in payment_rows.all()}

    return [
        Reservation(
            id=r.id,
            user_id=r.user_id,
            status=ReservationStatus(r.status),
            tickets=tickets_by_reservation[r.id],
            payment=payments.get(r.id),
            created_at=r.created_at,
            updated_at=r.updated_at,
        )
        for r in db_reservations
    ]
