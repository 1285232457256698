from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import Field, PlainSerializer

from src.platform.config.core_setting import settings
from src.service.ticket_reservation.domain.entity.payment_entity import Payment
from src.service.ticket_reservation.domain.entity.reservation_entity import Reservation
from src.service.ticket_reservation.domain.entity.ticket_entity import TicketEntity
from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from src.service.ticket_reservation.driving_adapter.http_controller.schema.api_response import (
    CamelModel,
)


# Decimal in Python, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used='json')]


# ========== Requests ==========


class TicketSelectionRequest(CamelModel):
    ticket_id: int = Field(gt=0)
    quantity: int = Field(default=1, ge=1, le=settings.MAX_TICKETS_PER_SELECTION)


class ReservationCreateRequest(CamelModel):
    tickets: List[TicketSelectionRequest] = Field(min_length=1)

    model_config = {
        'json_schema_extra': {
            'examples': [
                {'tickets': [{'ticketId': 1, 'quantity': 1}]},
                {'tickets': [{'ticketId': 1, 'quantity': 2}, {'ticketId': 7, 'quantity': 1}]},
            ]
        }
    }


class ReservationReleaseRequest(CamelModel):
    quantity: Optional[int] = Field(default=None, ge=1)

    model_config = {'json_schema_extra': {'example': {'quantity': 1}}}


class PaymentCreateRequest(CamelModel):
    reservation_id: int = Field(gt=0)
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)

    model_config = {'json_schema_extra': {'example': {'reservationId': 1, 'amount': 99.99}}}


class TicketsCreateRequest(CamelModel):
    event_id: int = Field(gt=0)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    count: int = Field(default=1, ge=1, le=settings.MAX_TICKETS_PER_BULK_CREATE)

    model_config = {
        'json_schema_extra': {'example': {'eventId': 1, 'price': 149.99, 'count': 50}}
    }


# ========== Responses ==========


class TicketResponse(CamelModel):
    id: int
    event_id: int
    price: Money
    status: TicketStatus
    reservation_id: Optional[int] = None

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'TicketResponse':
        return cls(
            id=ticket.id or 0,
            event_id=ticket.event_id,
            price=ticket.price,
            status=ticket.status,
            reservation_id=ticket.reservation_id,
        )


class PaymentResponse(CamelModel):
    id: int
    reservation_id: int
    amount: Money
    status: PaymentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, payment: Payment) -> 'PaymentResponse':
        return cls(
            id=payment.id or 0,
            reservation_id=payment.reservation_id,
            amount=payment.amount,
            status=payment.status,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


class ReservationResponse(CamelModel):
    id: int
    user_id: int
    status: ReservationStatus
    tickets: List[TicketResponse] = []
    total_amount: Money
    payment: Optional[PaymentResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationResponse':
        return cls(
            id=reservation.id or 0,
            user_id=reservation.user_id,
            status=reservation.status,
            tickets=[TicketResponse.from_entity(t) for t in reservation.tickets],
            total_amount=reservation.total_amount,
            payment=PaymentResponse.from_entity(reservation.payment)
            if reservation.payment
            else None,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )


class ReservationReleaseResponse(CamelModel):
    event_id: Optional[int]
    status: ReservationStatus
    released_ticket_ids: List[int] = []


class CountResponse(CamelModel):
    count: int
