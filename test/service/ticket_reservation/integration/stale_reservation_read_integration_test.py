"""
Ticket writes stay tied to the reservation's current links.

A writer that works from an outdated copy of the reservation (what an
unlocked read can return under READ COMMITTED) must not release a ticket
that now belongs to someone else, nor book or charge for a ticket that was
already released. The copy is served by a unit of work that hands out a
reservation read taken earlier.
"""

from collections.abc import AsyncGenerator, Callable
from decimal import Decimal
from typing import Any

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import ValidationError
from src.service.ticket_reservation.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.ticket_reservation.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.ticket_reservation.app.command.submit_payment_use_case import (
    SubmitPaymentUseCase,
)
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from src.service.ticket_reservation.domain.enum.user_role import UserRole
from src.service.ticket_reservation.domain.value_object.ticket_selection import TicketSelection
from src.service.ticket_reservation.driven_adapter.model import (
    ReservationTicketModel,
    TicketModel,
)
from src.service.ticket_reservation.driven_adapter.payment.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from test.constants import STANDARD_PRICE


FIRST_CUSTOMER_ID = 401
SECOND_CUSTOMER_ID = 402


class OutdatedReadUnitOfWork(SqlAlchemyUnitOfWork):
    """Real repositories, except get_by_id returns a reservation read earlier."""

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession], outdated: Reservation
    ) -> None:
        super().__init__(session_factory)
        self.outdated = outdated

    async def __aenter__(self) -> 'OutdatedReadUnitOfWork':
        await super().__aenter__()

        async def _outdated_get_by_id(*, reservation_id: int) -> Reservation:
            return self.outdated

        self.reservations.get_by_id = _outdated_get_by_id  # type: ignore[method-assign]
        return self


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(db_url=settings.DATABASE_URL_ASYNC)
    yield db
    await db.dispose()


def _customer(user_id: int) -> Principal:
    return Principal(user_id=user_id, role=UserRole.CUSTOMER)


def _uow(database: Database) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(database.session_maker)


async def _reserve(database: Database, user_id: int, ticket_id: int, quantity: int) -> Reservation:
    return await CreateReservationUseCase(uow=_uow(database)).execute(
        principal=_customer(user_id),
        selections=[TicketSelection(ticket_id=ticket_id, quantity=quantity)],
    )


async def _read(database: Database, reservation_id: int) -> Reservation:
    async with _uow(database) as uow:
        reservation = await uow.reservations.get_by_id(reservation_id=reservation_id)
    assert reservation is not None
    return reservation


async def _ticket_state(database: Database, ticket_id: int) -> tuple[str, list[int]]:
    async with database.session() as session:
        status = await session.scalar(select(TicketModel.status).where(TicketModel.id == ticket_id))
        links = await session.scalars(
            select(ReservationTicketModel.reservation_id).where(
                ReservationTicketModel.ticket_id == ticket_id
            )
        )
        return str(status), list(links.all())


@pytest.mark.integration
class TestOutdatedReservationRead:
    async def test_partial_cancel_leaves_a_ticket_now_held_by_another_customer(
        self,
        database: Database,
        event_id: int,
        create_tickets: Callable[..., list[dict[str, Any]]],
    ) -> None:
        first, second, third = (t['id'] for t in create_tickets(event_id, count=3))
        held = await _reserve(database, FIRST_CUSTOMER_ID, first, quantity=3)
        outdated = await _read(database, held.id)

        await CancelReservationUseCase(uow=_uow(database)).execute(
            principal=_customer(FIRST_CUSTOMER_ID), reservation_id=held.id, quantity=1
        )
        taken_over = await _reserve(database, SECOND_CUSTOMER_ID, first, quantity=1)

        result = await CancelReservationUseCase(
            uow=OutdatedReadUnitOfWork(database.session_maker, outdated)
        ).execute(principal=_customer(FIRST_CUSTOMER_ID), reservation_id=held.id, quantity=1)

        assert result.released_ticket_ids == []
        assert await _ticket_state(database, first) == (TicketStatus.BOOKED, [taken_over.id])
        assert await _ticket_state(database, second) == (TicketStatus.BOOKED, [held.id])
        assert await _ticket_state(database, third) == (TicketStatus.BOOKED, [held.id])

    async def test_payment_neither_charges_nor_books_a_released_ticket(
        self,
        database: Database,
        event_id: int,
        create_tickets: Callable[..., list[dict[str, Any]]],
    ) -> None:
        first, second, _ = (t['id'] for t in create_tickets(event_id, count=3))
        held = await _reserve(database, FIRST_CUSTOMER_ID, first, quantity=3)
        outdated = await _read(database, held.id)
        assert outdated.total_amount == STANDARD_PRICE * 3

        await CancelReservationUseCase(uow=_uow(database)).execute(
            principal=_customer(FIRST_CUSTOMER_ID), reservation_id=held.id, quantity=1
        )

        def _payment() -> SubmitPaymentUseCase:
            return SubmitPaymentUseCase(
                uow=OutdatedReadUnitOfWork(database.session_maker, outdated),
                payment_gateway=SimulatedPaymentGateway(success_rate=1.0),
            )

        with pytest.raises(ValidationError):
            await _payment().execute(
                customer_id=FIRST_CUSTOMER_ID,
                reservation_id=held.id,
                amount=STANDARD_PRICE * 3,
            )

        payment = await _payment().execute(
            customer_id=FIRST_CUSTOMER_ID,
            reservation_id=held.id,
            amount=STANDARD_PRICE * 2,
        )

        assert payment.amount == Decimal('199.98')
        assert await _ticket_state(database, first) == (TicketStatus.AVAILABLE, [])
        assert await _ticket_state(database, second) == (TicketStatus.BOOKED, [held.id])
