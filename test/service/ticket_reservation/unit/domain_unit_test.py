"""
Unit tests for the reservation domain: entities, value objects and enums.
"""

from decimal import Decimal

import pytest

from src.platform.exception.exceptions import ConflictError, ForbiddenError, ValidationError
from src.service.ticket_reservation.domain.entity.payment_entity import Payment
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.entity.ticket_entity import normalize_price
from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.ticket_reservation.domain.enum.user_role import UserRole
from src.service.ticket_reservation.domain.value_object.ticket_selection import TicketSelection
from test.service.ticket_reservation.builders import make_reservation, make_ticket


@pytest.mark.unit
class TestReservation:
    def test_total_amount_sums_ticket_prices(self) -> None:
        reservation = make_reservation(ticket_ids=(1, 2, 3), price='33.33')

        assert reservation.total_amount == Decimal('99.99')

    def test_empty_reservation_has_no_event(self) -> None:
        reservation = make_reservation(ticket_ids=())

        assert reservation.event_id is None
        assert reservation.total_amount == Decimal('0.00')

    def test_confirm_moves_pending_to_confirmed(self) -> None:
        confirmed = make_reservation().confirm()

        assert confirmed.status == ReservationStatus.CONFIRMED
        assert confirmed.updated_at is not None

    def test_cancelled_is_terminal(self) -> None:
        cancelled = make_reservation().cancel()

        assert cancelled.is_cancelled
        assert cancelled.tickets == []
        with pytest.raises(ConflictError):
            cancelled.confirm()
        with pytest.raises(ConflictError):
            cancelled.cancel()

    def test_without_tickets_keeps_status(self) -> None:
        reservation = make_reservation(ticket_ids=(1, 2, 3))

        remaining = reservation.without_tickets({2})

        assert [t.id for t in remaining.tickets] == [1, 3]
        assert remaining.status == ReservationStatus.PENDING

    def test_payment_rules(self) -> None:
        reservation = make_reservation(user_id=2)

        reservation.validate_can_be_paid_by(2)
        with pytest.raises(ForbiddenError):
            reservation.validate_can_be_paid_by(3)

        reservation.payment = Payment(
            reservation_id=10, amount=Decimal('99.99'), status=PaymentStatus.FAILED
        )
        reservation.validate_can_be_paid_by(2)

        reservation.payment = Payment(
            reservation_id=10, amount=Decimal('99.99'), status=PaymentStatus.COMPLETED
        )
        with pytest.raises(ConflictError, match='already completed'):
            reservation.validate_can_be_paid_by(2)

    @pytest.mark.parametrize(
        'principal, allowed',
        [
            (Principal(user_id=2, role=UserRole.CUSTOMER), True),
            (Principal(user_id=3, role=UserRole.CUSTOMER), False),
            (Principal(user_id=9, role=UserRole.ORGANIZER), False),
            (Principal(user_id=9, role=UserRole.ADMIN), True),
        ],
    )
    def test_cancel_permissions(self, principal: Principal, allowed: bool) -> None:
        reservation = make_reservation(user_id=2)

        if allowed:
            reservation.validate_can_be_cancelled_by(principal)
        else:
            with pytest.raises(ForbiddenError):
                reservation.validate_can_be_cancelled_by(principal)


@pytest.mark.unit
class TestTicket:
    def test_same_tier_requires_event_and_price(self) -> None:
        base = make_ticket(1, price='99.99', event_id=1)

        assert base.same_tier_as(make_ticket(2, price='99.99', event_id=1))
        assert not base.same_tier_as(make_ticket(3, price='149.99', event_id=1))
        assert not base.same_tier_as(make_ticket(4, price='99.99', event_id=2))

    @pytest.mark.parametrize('raw, expected', [('10', '10.00'), (Decimal('99.999'), '100.00')])
    def test_normalize_price(self, raw: str | Decimal, expected: str) -> None:
        assert normalize_price(raw) == Decimal(expected)

    @pytest.mark.parametrize('raw', ['0', '-1', 'NaN', 'abc'])
    def test_normalize_price_rejects(self, raw: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            normalize_price(raw)

        assert exc_info.value.errors[0]['path'] == ['price']


@pytest.mark.unit
class TestTicketSelection:
    def test_valid_selections_pass(self) -> None:
        TicketSelection.validate_all(
            [TicketSelection(1, 2), TicketSelection(5)], max_quantity=10
        )

    def test_empty_list_is_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TicketSelection.validate_all([], max_quantity=10)

        assert exc_info.value.errors == [
            {'path': ['tickets'], 'message': 'At least one ticket is required'}
        ]

    def test_collects_every_problem(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TicketSelection.validate_all(
                [TicketSelection(1, 0), TicketSelection(1, 11), TicketSelection(0)],
                max_quantity=10,
            )

        assert [e['path'] for e in exc_info.value.errors] == [
            ['tickets', 0, 'quantity'],
            ['tickets', 1, 'quantity'],
            ['tickets', 1, 'ticketId'],
            ['tickets', 2, 'ticketId'],
        ]


@pytest.mark.unit
class TestUserRole:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            ('customer', UserRole.CUSTOMER),
            ('ADMIN', UserRole.ADMIN),
            (' Organizer ', UserRole.ORGANIZER),
            ('guest', None),
            ('', None),
            (None, None),
        ],
    )
    def test_parse(self, raw: str | None, expected: UserRole | None) -> None:
        assert UserRole.parse(raw) == expected
