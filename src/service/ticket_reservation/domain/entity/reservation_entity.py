from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import ConflictError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.domain.entity.payment_entity import Payment
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.entity.ticket_entity import (
    PRICE_QUANTUM,
    TicketEntity,
)
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus


@attrs.define
class Reservation:
    user_id: int
    status: ReservationStatus = ReservationStatus.PENDING
    id: Optional[int] = None
    tickets: List[TicketEntity] = attrs.field(factory=list)
    payment: Optional[Payment] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_cancelled(self) -> bool:
        return self.status == ReservationStatus.CANCELLED

    @property
    def total_amount(self) -> Decimal:
        return sum((t.price for t in self.tickets), Decimal('0')).quantize(PRICE_QUANTUM)

    @property
    def event_id(self) -> Optional[int]:
        return self.tickets[0].event_id if self.tickets else None

    def ensure_visible_to(self, principal: Principal) -> None:
        if principal.can_view_all or principal.user_id == self.user_id:
            return
        raise ForbiddenError('You do not have access to this reservation')

    @Logger.io
    def validate_can_be_paid_by(self, user_id: int) -> None:
        if self.user_id != user_id:
            raise ForbiddenError('Only the owner can pay for this reservation')
        if self.is_cancelled:
            raise ConflictError('Reservation is cancelled')
        if self.payment is not None and self.payment.is_completed:
            raise ConflictError('Payment already completed')

    @Logger.io
    def validate_can_be_cancelled_by(self, principal: Principal) -> None:
        if not principal.is_admin and principal.user_id != self.user_id:
            raise ForbiddenError('Only the owner or an admin can cancel this reservation')
        if self.is_cancelled:
            raise ConflictError('Reservation is already cancelled')

    def confirm(self) -> 'Reservation':
        if self.is_cancelled:
            raise ConflictError('Reservation is cancelled')
        return attrs.evolve(
            self, status=ReservationStatus.CONFIRMED, updated_at=datetime.now(timezone.utc)
        )

    def cancel(self) -> 'Reservation':
        if self.is_cancelled:
            raise ConflictError('Reservation is already cancelled')
        return attrs.evolve(
            self,
            status=ReservationStatus.CANCELLED,
            tickets=[],
            updated_at=datetime.now(timezone.utc),
        )

    def without_tickets(self, released_ids: set[int]) -> 'Reservation':
        remaining = [t for t in self.tickets if t.id not in released_ids]
        return attrs.evolve(self, tickets=remaining, updated_at=datetime.now(timezone.utc))
