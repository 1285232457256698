from enum import StrEnum


class ReservationStatus(StrEnum):
    """
    pending   --[payment completed]--> confirmed
    pending   --[cancel]-------------> cancelled
    confirmed --[cancel]-------------> cancelled

    cancelled is terminal.
    """

    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
