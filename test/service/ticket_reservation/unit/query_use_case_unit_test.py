from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.ticket_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.ticket_reservation.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticket_reservation.app.query.get_reservation_use_case import (
    GetReservationUseCase,
)
from src.service.ticket_reservation.app.query.list_event_tickets_use_case import (
    ListEventTicketsUseCase,
)
from src.service.ticket_reservation.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from test.service.ticket_reservation.builders import make_event, make_reservation, make_ticket


@pytest.fixture
def reservation_query_repo() -> AsyncMock:
    return AsyncMock(spec=IReservationQueryRepo)


@pytest.fixture
def ticket_query_repo() -> AsyncMock:
    return AsyncMock(spec=ITicketQueryRepo)


@pytest.mark.unit
class TestListReservationsUseCase:
    async def test_customer_sees_own_only(
        self, reservation_query_repo: AsyncMock, customer: Principal
    ) -> None:
        reservation_query_repo.list_reservations.return_value = [make_reservation()]

        result = await ListReservationsUseCase(reservation_query_repo).list_reservations(customer)

        assert len(result) == 1
        reservation_query_repo.list_reservations.assert_awaited_once_with(user_id=2)

    async def test_admin_sees_all(
        self, reservation_query_repo: AsyncMock, admin: Principal
    ) -> None:
        reservation_query_repo.list_reservations.return_value = []

        await ListReservationsUseCase(reservation_query_repo).list_reservations(admin)

        reservation_query_repo.list_reservations.assert_awaited_once_with(user_id=None)

    async def test_count_confirmed(
        self, reservation_query_repo: AsyncMock, customer: Principal
    ) -> None:
        reservation_query_repo.count_by_status.return_value = 3

        count = await ListReservationsUseCase(reservation_query_repo).count_confirmed(customer)

        assert count == 3
        reservation_query_repo.count_by_status.assert_awaited_once_with(
            user_id=2, status=ReservationStatus.CONFIRMED
        )


@pytest.mark.unit
class TestGetReservationUseCase:
    async def test_owner_can_read(
        self, reservation_query_repo: AsyncMock, customer: Principal
    ) -> None:
        reservation_query_repo.get_by_id.return_value = make_reservation(10, user_id=2)

        reservation = await GetReservationUseCase(reservation_query_repo).get_reservation(
            principal=customer, reservation_id=10
        )

        assert reservation.id == 10

    async def test_organizer_can_read_any(
        self, reservation_query_repo: AsyncMock, organizer: Principal
    ) -> None:
        reservation_query_repo.get_by_id.return_value = make_reservation(10, user_id=2)

        reservation = await GetReservationUseCase(reservation_query_repo).get_reservation(
            principal=organizer, reservation_id=10
        )

        assert reservation.user_id == 2

    async def test_other_customer_is_forbidden(
        self, reservation_query_repo: AsyncMock, another_customer: Principal
    ) -> None:
        reservation_query_repo.get_by_id.return_value = make_reservation(10, user_id=2)

        with pytest.raises(ForbiddenError):
            await GetReservationUseCase(reservation_query_repo).get_reservation(
                principal=another_customer, reservation_id=10
            )

    async def test_missing_is_not_found(
        self, reservation_query_repo: AsyncMock, customer: Principal
    ) -> None:
        reservation_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await GetReservationUseCase(reservation_query_repo).get_reservation(
                principal=customer, reservation_id=10
            )


@pytest.mark.unit
class TestListEventTicketsUseCase:
    async def test_lists_with_status_filter(self, ticket_query_repo: AsyncMock) -> None:
        ticket_query_repo.get_event.return_value = make_event()
        ticket_query_repo.list_by_event.return_value = [make_ticket(1)]

        tickets = await ListEventTicketsUseCase(ticket_query_repo).list_tickets(
            event_id=1, status=TicketStatus.AVAILABLE
        )

        assert [t.id for t in tickets] == [1]
        ticket_query_repo.list_by_event.assert_awaited_once_with(
            event_id=1, status=TicketStatus.AVAILABLE
        )

    async def test_unknown_event_is_not_found(self, ticket_query_repo: AsyncMock) -> None:
        ticket_query_repo.get_event.return_value = None

        with pytest.raises(NotFoundError):
            await ListEventTicketsUseCase(ticket_query_repo).list_tickets(event_id=1)

        ticket_query_repo.list_by_event.assert_not_awaited()
