from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class ReservationTicketModel(Base):
    """
    Link between a reservation and one of its tickets.

    ticket_id is unique: a ticket belongs to at most one live reservation.
    Links are deleted when tickets are released.
    """

    __tablename__ = 'reservation_ticket'

    reservation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('reservation.id', ondelete='CASCADE'),
        primary_key=True,
        index=True,
    )
    ticket_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('ticket.id'), primary_key=True, unique=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
