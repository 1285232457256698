from datetime import datetime
from typing import Optional

import attrs


@attrs.define
class EventEntity:
    """Read-only view of an event; events are managed elsewhere."""

    name: str
    organizer_id: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def is_owned_by(self, user_id: int) -> bool:
        return self.organizer_id == user_id
