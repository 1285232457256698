"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.ticket_reservation.driven_adapter.model.event_model import EventModel
from src.service.ticket_reservation.driven_adapter.model.payment_model import PaymentModel
from src.service.ticket_reservation.driven_adapter.model.reservation_model import (
    ReservationModel,
)
from src.service.ticket_reservation.driven_adapter.model.reservation_ticket_model import (
    ReservationTicketModel,
)
from src.service.ticket_reservation.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'EventModel',
    'PaymentModel',
    'ReservationModel',
    'ReservationTicketModel',
    'TicketModel',
]
