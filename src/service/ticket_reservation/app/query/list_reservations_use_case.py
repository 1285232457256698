from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus


class ListReservationsUseCase:
    def __init__(self, reservation_query_repo: IReservationQueryRepo):
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def list_reservations(self, principal: Principal) -> List[Reservation]:
        # customers only see their own reservations
        user_id = None if principal.can_view_all else principal.user_id
        return await self.reservation_query_repo.list_reservations(user_id=user_id)

    @Logger.io
    async def count_confirmed(self, principal: Principal) -> int:
        return await self.reservation_query_repo.count_by_status(
            user_id=principal.user_id, status=ReservationStatus.CONFIRMED
        )
