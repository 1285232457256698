from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.ticket_reservation.domain.entity.event_entity import EventEntity
from src.service.ticket_reservation.domain.entity.ticket_entity import TicketEntity
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def get_event(self, *, event_id: int) -> EventEntity | None:
        pass

    @abstractmethod
    async def list_by_event(
        self, *, event_id: int, status: Optional[TicketStatus] = None
    ) -> List[TicketEntity]:
        pass
