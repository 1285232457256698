from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_reservation.app.interface.i_payment_command_repo import (
    IPaymentCommandRepo,
)
from src.service.ticket_reservation.domain.entity.payment_entity import Payment
from src.service.ticket_reservation.domain.enum.payment_status import PaymentStatus
from src.service.ticket_reservation.driven_adapter.model.payment_model import PaymentModel
from src.service.ticket_reservation.driven_adapter.repo.model_mapper import to_payment_entity


class PaymentCommandRepoImpl(IPaymentCommandRepo):
    """
    One payment row per reservation (unique reservation_id).

    upsert() inserts the first attempt and overwrites later ones, but a
    completed row is never touched again.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _select(self, reservation_id: int) -> PaymentModel | None:
        return await self.session.scalar(
            select(PaymentModel)
            .where(PaymentModel.reservation_id == reservation_id)
            .execution_options(populate_existing=True)
        )

    @Logger.io
    async def get_by_reservation_id(self, *, reservation_id: int) -> Payment | None:
        db_payment = await self._select(reservation_id)
        return to_payment_entity(db_payment) if db_payment else None

    @Logger.io
    async def upsert(
        self, *, reservation_id: int, amount: Decimal, status: PaymentStatus
    ) -> Payment:
        if await self._select(reservation_id) is None:
            # a concurrent first attempt loses on the unique reservation_id (IntegrityError)
            self.session.add(
                PaymentModel(reservation_id=reservation_id, amount=amount, status=status)
            )
            await self.session.flush()
        else:
            result = await self.session.execute(
                update(PaymentModel)
                .where(
                    PaymentModel.reservation_id == reservation_id,
                    PaymentModel.status != PaymentStatus.COMPLETED,
                )
                .values(amount=amount, status=status)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise ConflictError('Payment already completed')

        db_payment = await self._select(reservation_id)
        assert db_payment is not None
        return to_payment_entity(db_payment)
