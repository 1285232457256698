"""Application layer interfaces (Ports)"""

from src.service.ticket_reservation.app.interface.i_event_repo import IEventRepo
from src.service.ticket_reservation.app.interface.i_payment_command_repo import (
    IPaymentCommandRepo,
)
from src.service.ticket_reservation.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticket_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.ticket_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.ticket_reservation.app.interface.i_ticket_command_repo import (
    ITicketCommandRepo,
)
from src.service.ticket_reservation.app.interface.i_ticket_query_repo import ITicketQueryRepo

__all__ = [
    'IEventRepo',
    'IPaymentCommandRepo',
    'IPaymentGateway',
    'IReservationCommandRepo',
    'IReservationQueryRepo',
    'ITicketCommandRepo',
    'ITicketQueryRepo',
]
