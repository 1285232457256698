from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus


@attrs.define
class Payment:
    """Single settlement record of a reservation; overwritten on retry until completed."""

    reservation_id: int
    amount: Decimal
    status: PaymentStatus = PaymentStatus.PENDING
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED
