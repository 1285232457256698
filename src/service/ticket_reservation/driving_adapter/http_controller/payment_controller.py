from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.command.submit_payment_use_case import (
    SubmitPaymentUseCase,
)
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.driving_adapter.http_controller.auth.role_auth import (
    require_customer,
)
from src.service.ticket_reservation.driving_adapter.http_controller.schema.api_response import (
    ApiResponse,
)
from src.service.ticket_reservation.driving_adapter.http_controller.schema.reservation_schema import (
    PaymentCreateRequest,
    PaymentResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post(
    '',
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[PaymentResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def submit_payment(
    request: PaymentCreateRequest,
    principal: Principal = Depends(require_customer),
    use_case: SubmitPaymentUseCase = Depends(SubmitPaymentUseCase.depends),
) -> ApiResponse[PaymentResponse]:
    """
    Pay for a reservation.

    A declined charge is still stored as a failed payment; the response is
    then 409 "Payment failed, please retry" and the call may be repeated.
    """
    with tracer.start_as_current_span('controller.submit_payment') as span:
        span.set_attribute('reservation.id', request.reservation_id)
        payment = await use_case.execute(
            customer_id=principal.user_id,
            reservation_id=request.reservation_id,
            amount=request.amount,
        )
        return ApiResponse(data=PaymentResponse.from_entity(payment), message='Payment completed')
