from enum import StrEnum


class TicketStatus(StrEnum):
    AVAILABLE = 'available'
    BOOKED = 'booked'
