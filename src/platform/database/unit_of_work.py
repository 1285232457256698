"""
Unit of Work - one session and one transaction per business operation

- UoW owns the session lifecycle and commit/rollback
- Repositories get the UoW's session, so every write in a use case lands
  in the same transaction
- Leaving the block without commit() rolls back
"""

from __future__ import annotations

import abc
from types import TracebackType
from typing import TYPE_CHECKING, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


if TYPE_CHECKING:
    from src.service.ticket_reservation.app.interface.i_event_repo import IEventRepo
    from src.service.ticket_reservation.app.interface.i_payment_command_repo import (
        IPaymentCommandRepo,
    )
    from src.service.ticket_reservation.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )
    from src.service.ticket_reservation.app.interface.i_ticket_command_repo import (
        ITicketCommandRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            reservation = await uow.reservations.create(reservation=...)
            await uow.commit()
    """

    events: IEventRepo
    tickets: ITicketCommandRepo
    reservations: IReservationCommandRepo
    payments: IPaymentCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.ticket_reservation.driven_adapter.repo.event_repo_impl import (
            EventRepoImpl,
        )
        from src.service.ticket_reservation.driven_adapter.repo.payment_command_repo_impl import (
            PaymentCommandRepoImpl,
        )
        from src.service.ticket_reservation.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from src.service.ticket_reservation.driven_adapter.repo.ticket_command_repo_impl import (
            TicketCommandRepoImpl,
        )

        self.session = self.session_factory()

        # Every repository shares the UoW session
        self.events = EventRepoImpl(self.session)
        self.tickets = TicketCommandRepoImpl(self.session)
        self.reservations = ReservationCommandRepoImpl(self.session)
        self.payments = PaymentCommandRepoImpl(self.session)

        await super().__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        finally:
            assert self.session is not None
            await self.session.close()
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
