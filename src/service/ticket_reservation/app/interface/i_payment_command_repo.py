from abc import ABC, abstractmethod
from decimal import Decimal

from src.service.ticket_reservation.domain.entity.payment_entity import Payment
from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus


class IPaymentCommandRepo(ABC):
    @abstractmethod
    async def get_by_reservation_id(self, *, reservation_id: int) -> Payment | None:
        pass

    @abstractmethod
    async def upsert(
        self, *, reservation_id: int, amount: Decimal, status: PaymentStatus
    ) -> Payment:
        """
        Create the reservation's payment or overwrite the existing one.

        Raises:
            ConflictError: the existing payment is already completed
        """
        pass
