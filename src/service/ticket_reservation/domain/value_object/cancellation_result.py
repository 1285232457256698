from typing import List, Optional

import attrs

from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation


@attrs.frozen
class CancellationResult:
    reservation: Reservation
    event_id: Optional[int]
    released_ticket_ids: List[int] = attrs.field(factory=list)

    @property
    def is_full(self) -> bool:
        return self.reservation.is_cancelled
