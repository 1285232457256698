from enum import StrEnum
from typing import Optional


class UserRole(StrEnum):
    CUSTOMER = 'customer'
    ORGANIZER = 'organizer'
    ADMIN = 'admin'

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional['UserRole']:
        """Case-insensitive lookup; None when the value is not a known role."""
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None
