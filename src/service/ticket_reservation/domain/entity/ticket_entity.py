from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus


PRICE_QUANTUM = Decimal('0.01')


def normalize_price(price: Decimal | float | int | str) -> Decimal:
    """Two-decimal price; rejects zero, negatives and NaN."""
    try:
        value = Decimal(str(price)).quantize(PRICE_QUANTUM)
    except ArithmeticError:
        raise ValidationError.for_field(['price'], 'Price must be a number') from None
    if not value.is_finite() or value <= 0:
        raise ValidationError.for_field(['price'], 'Price must be greater than 0')
    return value


@attrs.define
class TicketEntity:
    event_id: int
    price: Decimal
    status: TicketStatus = TicketStatus.AVAILABLE
    id: Optional[int] = None
    reservation_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_available(self) -> bool:
        return self.status == TicketStatus.AVAILABLE

    def same_tier_as(self, other: 'TicketEntity') -> bool:
        return self.event_id == other.event_id and self.price == other.price
