import attrs

from src.service.ticket_reservation.domain.enum.user_role import UserRole


@attrs.frozen
class Principal:
    """Authenticated caller as handed over by the auth gateway."""

    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def can_view_all(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.ORGANIZER)
