import pytest

from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.enum.user_role import UserRole
from test.service.ticket_reservation.builders import FakeUnitOfWork


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def customer() -> Principal:
    return Principal(user_id=2, role=UserRole.CUSTOMER)


@pytest.fixture
def another_customer() -> Principal:
    return Principal(user_id=3, role=UserRole.CUSTOMER)


@pytest.fixture
def organizer() -> Principal:
    return Principal(user_id=1, role=UserRole.ORGANIZER)


@pytest.fixture
def admin() -> Principal:
    return Principal(user_id=4, role=UserRole.ADMIN)
