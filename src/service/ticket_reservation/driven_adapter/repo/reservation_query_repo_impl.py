from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.ticket_reservation.driven_adapter.model.reservation_model import (
    ReservationModel,
)
from src.service.ticket_reservation.driven_adapter.repo.model_mapper import load_reservations


class ReservationQueryRepoImpl(IReservationQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, reservation_id: int) -> Reservation | None:
        async with self.session_factory() as session:
            db_reservation = await session.scalar(
                select(ReservationModel).where(ReservationModel.id == reservation_id)
            )
            if db_reservation is None:
                return None
            [reservation] = await load_reservations(session, [db_reservation])
            return reservation

    @Logger.io
    async def list_reservations(self, *, user_id: Optional[int] = None) -> List[Reservation]:
        stmt = select(ReservationModel).order_by(
            ReservationModel.created_at.desc(), ReservationModel.id.desc()
        )
        if user_id is not None:
            stmt = stmt.where(ReservationModel.user_id == user_id)

        async with self.session_factory() as session:
            result = await session.scalars(stmt)
            return await load_reservations(session, result.all())

    @Logger.io
    async def count_by_status(self, *, user_id: int, status: ReservationStatus) -> int:
        async with self.session_factory() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(ReservationModel)
                .where(ReservationModel.user_id == user_id, ReservationModel.status == status)
            )
            return count or 0
