from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.command.create_tickets_use_case import (
    CreateTicketsUseCase,
)
from src.service.ticket_reservation.app.query.list_event_tickets_use_case import (
    ListEventTicketsUseCase,
)
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.enum.ticket_status import TicketStatus
from src.service.ticket_reservation.driving_adapter.http_controller.auth.role_auth import (
    get_current_principal,
    require_organizer_or_admin,
)
from src.service.ticket_reservation.driving_adapter.http_controller.schema.api_response import (
    ApiResponse,
)
from src.service.ticket_reservation.driving_adapter.http_controller.schema.reservation_schema import (
    TicketResponse,
    TicketsCreateRequest,
)


router = APIRouter()
event_router = APIRouter()


@router.post(
    '',
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[List[TicketResponse]],
    response_model_exclude_none=True,
)
@Logger.io
async def create_tickets(
    request: TicketsCreateRequest,
    principal: Principal = Depends(require_organizer_or_admin),
    use_case: CreateTicketsUseCase = Depends(CreateTicketsUseCase.depends),
) -> ApiResponse[List[TicketResponse]]:
    tickets = await use_case.execute(
        principal=principal,
        event_id=request.event_id,
        price=request.price,
        count=request.count,
    )
    return ApiResponse(
        data=[TicketResponse.from_entity(t) for t in tickets],
        message=f'{len(tickets)} ticket(s) created',
    )


@event_router.get(
    '/{event_id}/tickets',
    response_model=ApiResponse[List[TicketResponse]],
    response_model_exclude_none=True,
)
@Logger.io
async def list_event_tickets(
    event_id: int,
    ticket_status: Optional[TicketStatus] = Query(default=None, alias='status'),
    principal: Principal = Depends(get_current_principal),
    use_case: ListEventTicketsUseCase = Depends(ListEventTicketsUseCase.depends),
) -> ApiResponse[List[TicketResponse]]:
    tickets = await use_case.list_tickets(event_id=event_id, status=ticket_status)
    return ApiResponse(data=[TicketResponse.from_entity(t) for t in tickets])
