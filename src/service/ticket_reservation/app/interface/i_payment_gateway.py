from abc import ABC, abstractmethod
from decimal import Decimal

from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus


class IPaymentGateway(ABC):
    """Settles a charge; the returned status is final (completed or failed)."""

    @abstractmethod
    async def charge(self, *, reservation_id: int, amount: Decimal) -> PaymentStatus:
        pass
