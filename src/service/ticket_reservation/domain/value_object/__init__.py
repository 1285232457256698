"""Ticket Reservation Value Objects"""

from src.service.ticket_reservation.domain.value_object.cancellation_result import (
    CancellationResult,
)
from src.service.ticket_reservation.domain.value_object.ticket_selection import TicketSelection

__all__ = ['CancellationResult', 'TicketSelection']
