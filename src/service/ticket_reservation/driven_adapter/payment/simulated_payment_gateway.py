from decimal import Decimal
import random
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus


class SimulatedPaymentGateway(IPaymentGateway):
    """
    Stand-in for a real payment provider: completes a charge with probability
    success_rate and fails it otherwise.
    """

    def __init__(self, *, success_rate: float = 0.9, rng: Optional[random.Random] = None) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError('success_rate must be between 0 and 1')
        self.success_rate = success_rate
        self._rng = rng or random.Random()

    @Logger.io
    async def charge(self, *, reservation_id: int, amount: Decimal) -> PaymentStatus:
        approved = self._rng.random() < self.success_rate
        status = PaymentStatus.COMPLETED if approved else PaymentStatus.FAILED
        Logger.base.info(
            f'💳 [GATEWAY] reservation={reservation_id} amount={amount} -> {status}'
        )
        return status
