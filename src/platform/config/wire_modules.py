"""
Wire Modules Configuration

Modules whose Provide[...] markers need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ticket_reservation.app.command import (
    cancel_reservation_use_case,
    create_reservation_use_case,
    create_tickets_use_case,
    submit_payment_use_case,
)
from src.service.ticket_reservation.app.query import (
    get_reservation_use_case,
    list_event_tickets_use_case,
    list_reservations_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_reservation_use_case,
    submit_payment_use_case,
    cancel_reservation_use_case,
    create_tickets_use_case,
    list_reservations_use_case,
    get_reservation_use_case,
    list_event_tickets_use_case,
]
