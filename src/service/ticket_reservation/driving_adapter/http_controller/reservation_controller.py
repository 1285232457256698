from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.ticket_reservation.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.ticket_reservation.app.query.get_reservation_use_case import (
    GetReservationUseCase,
)
from src.service.ticket_reservation.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.value_object.ticket_selection import TicketSelection
from src.service.ticket_reservation.driving_adapter.http_controller.auth.role_auth import (
    get_current_principal,
)
from src.service.ticket_reservation.driving_adapter.http_controller.schema.api_response import (
    ApiResponse,
)
from src.service.ticket_reservation.driving_adapter.http_controller.schema.reservation_schema import (
    CountResponse,
    ReservationCreateRequest,
    ReservationReleaseRequest,
    ReservationReleaseResponse,
    ReservationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post(
    '',
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ReservationResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def create_reservation(
    request: ReservationCreateRequest,
    principal: Principal = Depends(get_current_principal),
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ApiResponse[ReservationResponse]:
    with tracer.start_as_current_span('controller.create_reservation'):
        reservation = await use_case.execute(
            principal=principal,
            selections=[
                TicketSelection(ticket_id=t.ticket_id, quantity=t.quantity)
                for t in request.tickets
            ],
        )
        return ApiResponse(
            data=ReservationResponse.from_entity(reservation),
            message='Reservation created',
        )


@router.get(
    '',
    response_model=ApiResponse[List[ReservationResponse]],
    response_model_exclude_none=True,
)
@Logger.io
async def list_reservations(
    principal: Principal = Depends(get_current_principal),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> ApiResponse[List[ReservationResponse]]:
    """Customers see their own reservations; organizers and admins see all."""
    reservations = await use_case.list_reservations(principal)
    return ApiResponse(data=[ReservationResponse.from_entity(r) for r in reservations])


@router.get('/count', response_model=ApiResponse[CountResponse], response_model_exclude_none=True)
@Logger.io
async def count_confirmed_reservations(
    principal: Principal = Depends(get_current_principal),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> ApiResponse[CountResponse]:
    count = await use_case.count_confirmed(principal)
    return ApiResponse(data=CountResponse(count=count))


@router.get(
    '/{reservation_id}',
    response_model=ApiResponse[ReservationResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def get_reservation(
    reservation_id: int,
    principal: Principal = Depends(get_current_principal),
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ApiResponse[ReservationResponse]:
    reservation = await use_case.get_reservation(
        principal=principal, reservation_id=reservation_id
    )
    return ApiResponse(data=ReservationResponse.from_entity(reservation))


@router.delete(
    '/{reservation_id}',
    response_model=ApiResponse[ReservationReleaseResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def release_reservation_tickets(
    reservation_id: int,
    request: Optional[ReservationReleaseRequest] = Body(default=None),
    principal: Principal = Depends(get_current_principal),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ApiResponse[ReservationReleaseResponse]:
    """Release `quantity` tickets, or all of them when no quantity is sent."""
    with tracer.start_as_current_span('controller.release_reservation_tickets'):
        result = await use_case.execute(
            principal=principal,
            reservation_id=reservation_id,
            quantity=request.quantity if request else None,
        )
        return ApiResponse(
            data=ReservationReleaseResponse(
                event_id=result.event_id,
                status=result.reservation.status,
                released_ticket_ids=result.released_ticket_ids,
            ),
            message='Reservation cancelled' if result.is_full else 'Tickets released',
        )


@router.post(
    '/{reservation_id}/cancel',
    response_model=ApiResponse[ReservationResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def cancel_reservation(
    reservation_id: int,
    principal: Principal = Depends(get_current_principal),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ApiResponse[ReservationResponse]:
    with tracer.start_as_current_span('controller.cancel_reservation'):
        result = await use_case.execute(principal=principal, reservation_id=reservation_id)
        return ApiResponse(
            data=ReservationResponse.from_entity(result.reservation),
            message='Reservation cancelled',
        )
