"""
Fixtures for the HTTP integration suite.

Events have no API of their own, so they are inserted with SQL; tickets go
through POST /tickets as the owning organizer.
"""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    PAYMENT_CREATE,
    RESERVATION_CREATE,
    TICKET_CREATE,
)
from test.constants import (
    CUSTOMER_HEADERS,
    DEFAULT_EVENT_NAME,
    ORGANIZER_HEADERS,
    ORGANIZER_ID,
    STANDARD_PRICE,
)


@pytest.fixture
def create_event(execute_sql_statement: Callable[..., Any]) -> Callable[..., int]:
    def _create(name: str = DEFAULT_EVENT_NAME, organizer_id: int = ORGANIZER_ID) -> int:
        execute_sql_statement(
            'INSERT INTO event (name, organizer_id) VALUES (:name, :organizer_id)',
            {'name': name, 'organizer_id': organizer_id},
        )
        rows = execute_sql_statement('SELECT max(id) AS id FROM event', fetch=True)
        assert rows
        return rows[0]['id']

    return _create


@pytest.fixture
def create_tickets(client: TestClient) -> Callable[..., list[dict[str, Any]]]:
    def _create(
        event_id: int, price: Decimal = STANDARD_PRICE, count: int = 1
    ) -> list[dict[str, Any]]:
        response = client.post(
            TICKET_CREATE,
            json={'eventId': event_id, 'price': float(price), 'count': count},
            headers=ORGANIZER_HEADERS,
        )
        assert response.status_code == 201, response.text
        return response.json()['data']

    return _create


@pytest.fixture
def event_id(create_event: Callable[..., int]) -> int:
    return create_event()


@pytest.fixture
def reserve(client: TestClient) -> Callable[..., Any]:
    def _reserve(selections: list[tuple[int, int]], headers: dict[str, str] = CUSTOMER_HEADERS):
        return client.post(
            RESERVATION_CREATE,
            json={'tickets': [{'ticketId': t, 'quantity': q} for t, q in selections]},
            headers=headers,
        )

    return _reserve


@pytest.fixture
def pay(client: TestClient) -> Callable[..., Any]:
    def _pay(
        reservation_id: int, amount: Decimal | float, headers: dict[str, str] = CUSTOMER_HEADERS
    ):
        return client.post(
            PAYMENT_CREATE,
            json={'reservationId': reservation_id, 'amount': float(amount)},
            headers=headers,
        )

    return _pay


@pytest.fixture
def ticket_status(execute_sql_statement: Callable[..., Any]) -> Callable[[int], str]:
    def _status(ticket_id: int) -> str:
        rows = execute_sql_statement(
            'SELECT status FROM ticket WHERE id = :id', {'id': ticket_id}, fetch=True
        )
        assert rows
        return rows[0]['status']

    return _status
