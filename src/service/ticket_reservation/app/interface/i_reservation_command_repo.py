"""
Reservation Command Repository Interface

Owns the reservation row and its reservation_ticket links.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List

from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus


class IReservationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        """Insert the reservation row and return it with its id."""
        pass

    @abstractmethod
    async def get_by_id(self, *, reservation_id: int) -> Reservation | None:
        """
        Reservation with its linked tickets and payment.

        Locks the reservation row until the transaction ends, so writers of the
        same reservation run one after another.
        """
        pass

    @abstractmethod
    async def link_tickets(self, *, reservation_id: int, ticket_ids: List[int]) -> None:
        pass

    @abstractmethod
    async def unlink_tickets(self, *, reservation_id: int, ticket_ids: List[int]) -> None:
        pass

    @abstractmethod
    async def count_linked_tickets(self, *, reservation_id: int) -> int:
        pass

    @abstractmethod
    async def linked_ticket_total(self, *, reservation_id: int) -> Decimal:
        """Sum of the prices of the tickets currently linked to the reservation."""
        pass

    @abstractmethod
    async def user_holds_ticket(self, *, user_id: int, ticket_id: int) -> bool:
        """True when the user has a non-cancelled reservation linked to the ticket."""
        pass

    @abstractmethod
    async def transition_status(
        self, *, reservation_id: int, to_status: ReservationStatus
    ) -> bool:
        """
        Conditional status change; never moves a cancelled reservation.

        Returns:
            False when 0 rows matched
        """
        pass
