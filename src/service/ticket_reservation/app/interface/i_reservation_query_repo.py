from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, reservation_id: int) -> Reservation | None:
        pass

    @abstractmethod
    async def list_reservations(self, *, user_id: Optional[int] = None) -> List[Reservation]:
        """Newest first; all users when user_id is None."""
        pass

    @abstractmethod
    async def count_by_status(self, *, user_id: int, status: ReservationStatus) -> int:
        pass
