from decimal import Decimal
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    ConflictError,
    NotFoundError,
    PaymentFailedError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.ticket_reservation.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticket_reservation.domain.entity.payment_entity import Payment
from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus
from src.service.ticket_reservation.domain.enum.reservation_status import ReservationStatus


class SubmitPaymentUseCase:
    """
    Settle a reservation.

    The gateway decides the outcome. In one transaction the payment row is
    created or overwritten with that outcome; on success the reservation
    becomes confirmed and its tickets stay booked. A failed attempt is
    committed too, then reported to the caller as PaymentFailedError.

    The reservation row is locked before the gateway is called, so a second
    attempt for the same reservation waits and then sees the completed payment
    instead of charging again. The amount is checked against the tickets still
    linked under that lock.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, payment_gateway: IPaymentGateway) -> None:
        self.uow = uow
        self.payment_gateway = payment_gateway
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
    ) -> Self:
        return cls(uow=uow, payment_gateway=payment_gateway)

    @staticmethod
    def _validate_amount(amount: Decimal, total: Decimal) -> Decimal:
        if not amount.is_finite() or amount <= 0:
            raise ValidationError.for_field(['amount'], 'Amount must be greater than 0')
        if amount != total:
            raise ValidationError.for_field(
                ['amount'], f'Amount {amount} does not match the reservation total {total}'
            )
        return total

    @Logger.io
    async def execute(self, *, customer_id: int, reservation_id: int, amount: Decimal) -> Payment:
        with self.tracer.start_as_current_span(
            'use_case.submit_payment',
            attributes={'user.id': customer_id, 'reservation.id': reservation_id},
        ):
            try:
                payment = await self._settle(
                    customer_id=customer_id, reservation_id=reservation_id, amount=amount
                )
            except Exception:
                metrics.record_payment(status='rejected')
                raise

            metrics.record_payment(status=payment.status)
            if payment.status != PaymentStatus.COMPLETED:
                Logger.base.info(
                    f'💳 [PAYMENT] Attempt for reservation {reservation_id} failed, '
                    f'recorded as {payment.status}'
                )
                raise PaymentFailedError()

            return payment

    async def _settle(self, *, customer_id: int, reservation_id: int, amount: Decimal) -> Payment:
        async with self.uow:
            reservation = await self.uow.reservations.get_by_id(reservation_id=reservation_id)
            if reservation is None:
                raise NotFoundError('Reservation not found')

            reservation.validate_can_be_paid_by(customer_id)
            total = await self.uow.reservations.linked_ticket_total(reservation_id=reservation_id)
            charged_amount = self._validate_amount(amount, total)

            outcome = await self.payment_gateway.charge(
                reservation_id=reservation_id, amount=charged_amount
            )
            payment = await self.uow.payments.upsert(
                reservation_id=reservation_id, amount=charged_amount, status=outcome
            )

            if outcome == PaymentStatus.COMPLETED:
                confirmed = reservation.confirm()
                if not await self.uow.reservations.transition_status(
                    reservation_id=reservation_id, to_status=ReservationStatus.CONFIRMED
                ):
                    raise ConflictError('Reservation is cancelled')
                await self.uow.tickets.mark_booked(reservation_id=reservation_id)
                Logger.base.info(
                    f'💳 [PAYMENT] Reservation {reservation_id} is now {confirmed.status}, '
                    f'amount {charged_amount}'
                )

            await self.uow.commit()

        return payment
