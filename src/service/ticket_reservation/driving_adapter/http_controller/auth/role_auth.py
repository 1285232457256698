"""
Principal resolution.

Authentication itself happens upstream: the auth gateway verifies the bearer
token and forwards the caller as x-user-id / x-user-role headers. Here we only
require the three headers to be present and well formed.
"""

from typing import Optional

from fastapi import Depends, Header
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError, UnauthorizedError
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.enum.user_role import UserRole


class RoleAuthStrategy:
    @staticmethod
    def can_reserve(principal: Principal) -> bool:
        return principal.role == UserRole.CUSTOMER

    @staticmethod
    def can_manage_tickets(principal: Principal) -> bool:
        return principal.role in (UserRole.ORGANIZER, UserRole.ADMIN)


def _parse_user_id(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip().isdigit():
        return None
    user_id = int(raw.strip())
    return user_id if user_id > 0 else None


async def get_current_principal(
    authorization: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Principal:
    scheme, _, token = (authorization or '').partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise UnauthorizedError('User not authenticated')

    user_id = _parse_user_id(x_user_id)
    role = UserRole.parse(x_user_role)
    if user_id is None or role is None:
        raise UnauthorizedError('Invalid user identity')

    trace.get_current_span().set_attributes({'user.id': user_id, 'user.role': role.value})
    return Principal(user_id=user_id, role=role)


async def require_customer(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not RoleAuthStrategy.can_reserve(principal):
        raise ForbiddenError('Only customers can perform this action')
    return principal


async def require_organizer_or_admin(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    if not RoleAuthStrategy.can_manage_tickets(principal):
        raise ForbiddenError('Only organizers and admins can perform this action')
    return principal
