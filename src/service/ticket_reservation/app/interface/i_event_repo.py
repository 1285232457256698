from abc import ABC, abstractmethod

from src.service.ticket_reservation.domain.entity.event_entity import EventEntity


class IEventRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> EventEntity | None:
        pass
