from decimal import Decimal
from typing import List

from sqlalchemy import Select, delete, exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.entity.ticket_entity import PRICE_QUANTUM
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.ticket_reservation.driven_adapter.model.reservation_model import (
    ReservationModel,
)
from src.service.ticket_reservation.driven_adapter.model.reservation_ticket_model import (
    ReservationTicketModel,
)
from src.service.ticket_reservation.driven_adapter.model.ticket_model import TicketModel
from src.service.ticket_reservation.driven_adapter.repo.model_mapper import load_reservations


def select_reservation_for_update(reservation_id: int) -> Select[tuple[ReservationModel]]:
    # row lock; SQLite renders no FOR UPDATE and relies on BEGIN IMMEDIATE instead
    return (
        select(ReservationModel)
        .where(ReservationModel.id == reservation_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


class ReservationCommandRepoImpl(IReservationCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        db_reservation = ReservationModel(
            user_id=reservation.user_id, status=reservation.status
        )
        self.session.add(db_reservation)
        await self.session.flush()
        await self.session.refresh(db_reservation)

        [created] = await load_reservations(self.session, [db_reservation])
        return created

    @Logger.io
    async def get_by_id(self, *, reservation_id: int) -> Reservation | None:
        db_reservation = await self.session.scalar(select_reservation_for_update(reservation_id))
        if db_reservation is None:
            return None
        [reservation] = await load_reservations(self.session, [db_reservation])
        return reservation

    @Logger.io
    async def link_tickets(self, *, reservation_id: int, ticket_ids: List[int]) -> None:
        self.session.add_all(
            ReservationTicketModel(reservation_id=reservation_id, ticket_id=ticket_id)
            for ticket_id in ticket_ids
        )
        # surfaces a duplicate ticket link as IntegrityError inside the transaction
        await self.session.flush()

    @Logger.io
    async def unlink_tickets(self, *, reservation_id: int, ticket_ids: List[int]) -> None:
        if not ticket_ids:
            return
        await self.session.execute(
            delete(ReservationTicketModel)
            .where(
                ReservationTicketModel.reservation_id == reservation_id,
                ReservationTicketModel.ticket_id.in_(ticket_ids),
            )
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def count_linked_tickets(self, *, reservation_id: int) -> int:
        count = await self.session.scalar(
            select(func.count())
            .select_from(ReservationTicketModel)
            .where(ReservationTicketModel.reservation_id == reservation_id)
        )
        return count or 0

    @Logger.io
    async def linked_ticket_total(self, *, reservation_id: int) -> Decimal:
        total = await self.session.scalar(
            select(func.sum(TicketModel.price))
            .select_from(ReservationTicketModel)
            .join(TicketModel, TicketModel.id == ReservationTicketModel.ticket_id)
            .where(ReservationTicketModel.reservation_id == reservation_id)
        )
        return Decimal(str(total or 0)).quantize(PRICE_QUANTUM)

    @Logger.io
    async def user_holds_ticket(self, *, user_id: int, ticket_id: int) -> bool:
        held = await self.session.scalar(
            select(
                exists()
                .where(
                    ReservationTicketModel.reservation_id == ReservationModel.id,
                    ReservationTicketModel.ticket_id == ticket_id,
                    ReservationModel.user_id == user_id,
                    ReservationModel.status != ReservationStatus.CANCELLED,
                )
            )
        )
        return bool(held)

    @Logger.io
    async def transition_status(
        self, *, reservation_id: int, to_status: ReservationStatus
    ) -> bool:
        result = await self.session.execute(
            update(ReservationModel)
            .where(
                ReservationModel.id == reservation_id,
                ReservationModel.status != ReservationStatus.CANCELLED,
            )
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]
