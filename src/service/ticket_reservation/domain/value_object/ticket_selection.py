from typing import Any, List

import attrs

from src.platform.exception.exceptions import ValidationError


@attrs.frozen
class TicketSelection:
    """
    One line of a reservation request: the named ticket plus quantity-1 more
    available tickets of the same event at the same price.
    """

    ticket_id: int
    quantity: int = 1

    @staticmethod
    def validate_all(selections: List['TicketSelection'], *, max_quantity: int) -> None:
        if not selections:
            raise ValidationError.for_field(['tickets'], 'At least one ticket is required')

        errors: list[dict[str, Any]] = []
        seen: set[int] = set()
        for index, selection in enumerate(selections):
            if selection.ticket_id < 1:
                errors.append(
                    {'path': ['tickets', index, 'ticketId'], 'message': 'Invalid ticket id'}
                )
            if not 1 <= selection.quantity <= max_quantity:
                errors.append(
                    {
                        'path': ['tickets', index, 'quantity'],
                        'message': f'Quantity must be between 1 and {max_quantity}',
                    }
                )
            if selection.ticket_id in seen:
                errors.append(
                    {
                        'path': ['tickets', index, 'ticketId'],
                        'message': f'Ticket {selection.ticket_id} is listed more than once',
                    }
                )
            seen.add(selection.ticket_id)

        if errors:
            raise ValidationError(errors=errors)
