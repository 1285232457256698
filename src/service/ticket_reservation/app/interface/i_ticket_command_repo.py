"""
Ticket Command Repository Interface

All writes to ticket.status go through claim(), release() and mark_booked(),
which are conditional updates: they only touch rows still in the expected
status, and release()/mark_booked() only rows linked to the reservation.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List

from src.service.ticket_reservation.domain.entity.ticket_entity import TicketEntity


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, ticket_id: int) -> TicketEntity | None:
        pass

    @abstractmethod
    async def find_available_in_tier(
        self, *, event_id: int, price: Decimal, exclude_ids: set[int], limit: int
    ) -> List[TicketEntity]:
        """Available tickets of the same event and price, lowest id first."""
        pass

    @abstractmethod
    async def claim(self, *, ticket_id: int) -> bool:
        """
        available -> booked for one ticket.

        Returns:
            False when the ticket was no longer available (0 rows matched)
        """
        pass

    @abstractmethod
    async def release(self, *, reservation_id: int, ticket_ids: List[int]) -> List[int]:
        """
        booked -> available for those of ticket_ids still linked to the reservation.

        Returns:
            Ids actually released, ascending
        """
        pass

    @abstractmethod
    async def mark_booked(self, *, reservation_id: int) -> None:
        """Books every ticket linked to the reservation; already booked ones stay booked."""
        pass

    @abstractmethod
    async def create_batch(
        self, *, event_id: int, price: Decimal, count: int
    ) -> List[TicketEntity]:
        pass
