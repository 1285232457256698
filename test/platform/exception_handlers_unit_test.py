"""
Error envelope tests against a throwaway app that only raises.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field
import pytest
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PaymentFailedError,
    UnauthorizedError,
    ValidationError,
)


class Body(BaseModel):
    quantity: int = Field(ge=1)


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    errors = {
        'unauthorized': UnauthorizedError(),
        'forbidden': ForbiddenError('nope'),
        'not-found': NotFoundError('missing'),
        'conflict': ConflictError('taken'),
        'payment-failed': PaymentFailedError(),
        'validation': ValidationError.for_field(['amount'], 'Amount must be greater than 0'),
        'integrity': IntegrityError('INSERT', {}, Exception('UNIQUE constraint failed')),
        'boom': RuntimeError('secret internals'),
    }

    @app.get('/raise/{kind}')
    async def _raise(kind: str) -> None:
        raise errors[kind]

    @app.post('/body')
    async def _body(body: Body) -> dict[str, int]:
        return {'quantity': body.quantity}

    return app


@pytest.fixture(scope='module')
def client() -> TestClient:
    return TestClient(_build_app(), raise_server_exceptions=False)


@pytest.mark.unit
class TestExceptionHandlers:
    @pytest.mark.parametrize(
        'kind, status_code, message',
        [
            ('unauthorized', 401, 'User not authenticated'),
            ('forbidden', 403, 'nope'),
            ('not-found', 404, 'missing'),
            ('conflict', 409, 'taken'),
            ('payment-failed', 409, 'Payment failed, please retry'),
        ],
    )
    def test_domain_errors_map_to_envelope(
        self, client: TestClient, kind: str, status_code: int, message: str
    ) -> None:
        response = client.get(f'/raise/{kind}')

        assert response.status_code == status_code
        assert response.json() == {'success': False, 'message': message}

    def test_validation_error_carries_field_errors(self, client: TestClient) -> None:
        response = client.get('/raise/validation')

        assert response.status_code == 400
        assert response.json() == {
            'success': False,
            'message': 'Amount must be greater than 0',
            'errors': [{'path': ['amount'], 'message': 'Amount must be greater than 0'}],
        }

    def test_request_validation_strips_location_prefix(self, client: TestClient) -> None:
        response = client.post('/body', json={'quantity': 0})

        assert response.status_code == 400
        body = response.json()
        assert body['success'] is False
        assert body['message'] == 'Validation Error'
        assert body['errors'][0]['path'] == ['quantity']

    def test_integrity_error_is_conflict(self, client: TestClient) -> None:
        response = client.get('/raise/integrity')

        assert response.status_code == 409
        assert response.json()['success'] is False

    def test_unhandled_error_hides_details(self, client: TestClient) -> None:
        response = client.get('/raise/boom')

        assert response.status_code == 500
        assert response.json() == {'success': False, 'message': 'Internal Server Error'}
