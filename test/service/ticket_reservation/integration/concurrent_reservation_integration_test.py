"""
Concurrency tests: many customers racing for the same ticket.

These drive the use cases directly on their own engine so the attempts
really overlap on the event loop.
"""

import asyncio
from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from sqlalchemy import func, select

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import ConflictError
from src.service.ticket_reservation.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.ticket_reservation.app.command.submit_payment_use_case import (
    SubmitPaymentUseCase,
)
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.enum.user_role import UserRole
from src.service.ticket_reservation.domain.value_object.ticket_selection import TicketSelection
from src.service.ticket_reservation.driven_adapter.model import (
    PaymentModel,
    ReservationTicketModel,
)
from src.service.ticket_reservation.driven_adapter.payment.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from test.constants import STANDARD_PRICE


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(db_url=settings.DATABASE_URL_ASYNC)
    yield db
    await db.dispose()


def _customer(user_id: int) -> Principal:
    return Principal(user_id=user_id, role=UserRole.CUSTOMER)


async def _attempt(database: Database, user_id: int, ticket_id: int) -> Any:
    use_case = CreateReservationUseCase(uow=SqlAlchemyUnitOfWork(database.session_maker))
    try:
        return await use_case.execute(
            principal=_customer(user_id), selections=[TicketSelection(ticket_id=ticket_id)]
        )
    except ConflictError as e:
        return e


@pytest.mark.integration
class TestConcurrentReservations:
    async def test_two_customers_one_ticket_exactly_one_wins(
        self,
        database: Database,
        event_id: int,
        create_tickets: Callable[..., list[dict[str, Any]]],
    ) -> None:
        [ticket] = create_tickets(event_id)

        results = await asyncio.gather(
            _attempt(database, 101, ticket['id']), _attempt(database, 102, ticket['id'])
        )

        conflicts = [r for r in results if isinstance(r, ConflictError)]
        winners = [r for r in results if not isinstance(r, ConflictError)]
        assert len(winners) == 1
        assert len(conflicts) == 1
        assert conflicts[0].status_code == 409

    async def test_many_attempts_leave_a_single_link(
        self,
        database: Database,
        event_id: int,
        create_tickets: Callable[..., list[dict[str, Any]]],
    ) -> None:
        [ticket] = create_tickets(event_id)

        results = await asyncio.gather(
            *(_attempt(database, 200 + i, ticket['id']) for i in range(8))
        )

        assert sum(not isinstance(r, ConflictError) for r in results) == 1
        async with database.session() as session:
            links = await session.scalar(
                select(func.count())
                .select_from(ReservationTicketModel)
                .where(ReservationTicketModel.ticket_id == ticket['id'])
            )
        assert links == 1

    async def test_concurrent_payments_settle_once(
        self,
        database: Database,
        event_id: int,
        create_tickets: Callable[..., list[dict[str, Any]]],
    ) -> None:
        [ticket] = create_tickets(event_id, STANDARD_PRICE)
        reservation = await _attempt(database, 301, ticket['id'])
        gateway = SimulatedPaymentGateway(success_rate=1.0)

        async def _pay() -> Any:
            use_case = SubmitPaymentUseCase(
                uow=SqlAlchemyUnitOfWork(database.session_maker), payment_gateway=gateway
            )
            try:
                return await use_case.execute(
                    customer_id=301, reservation_id=reservation.id, amount=STANDARD_PRICE
                )
            except ConflictError as e:
                return e

        results = await asyncio.gather(_pay(), _pay())

        assert sum(isinstance(r, ConflictError) for r in results) == 1
        async with database.session() as session:
            rows = await session.scalar(
                select(func.count())
                .select_from(PaymentModel)
                .where(PaymentModel.reservation_id == reservation.id)
            )
        assert rows == 1
