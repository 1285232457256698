"""Ticket Reservation Domain Enums"""

from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from src.service.ticket_reservation.domain.enum.user_role import UserRole

__all__ = ['PaymentStatus', 'ReservationStatus', 'TicketStatus', 'UserRole']
