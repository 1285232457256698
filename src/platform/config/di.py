"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.ticket_reservation.driven_adapter.payment.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from src.service.ticket_reservation.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.ticket_reservation.driven_adapter.repo.ticket_query_repo_impl import (
    TicketQueryRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database: one engine + session factory per process
    database = providers.Singleton(
        Database, db_url=config_service.provided.DATABASE_URL_ASYNC
    )

    # Unit of Work: a fresh one (own session/transaction) per use case instance
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session_maker
    )

    # Query repositories (stateless - open a session per call)
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )
    ticket_query_repo = providers.Singleton(
        TicketQueryRepoImpl, session_factory=database.provided.session
    )

    # Payment gateway
    payment_gateway = providers.Singleton(
        SimulatedPaymentGateway,
        success_rate=config_service.provided.PAYMENT_GATEWAY_SUCCESS_RATE,
    )


container = Container()

