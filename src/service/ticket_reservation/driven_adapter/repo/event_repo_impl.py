from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_event_repo import IEventRepo
from src.service.ticket_reservation.domain.entity.event_entity import EventEntity
from src.service.ticket_reservation.driven_adapter.model.event_model import EventModel
from src.service.ticket_reservation.driven_adapter.repo.model_mapper import to_event_entity


class EventRepoImpl(IEventRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> EventEntity | None:
        db_event = await self.session.scalar(select(EventModel).where(EventModel.id == event_id))
        return to_event_entity(db_event) if db_event else None
