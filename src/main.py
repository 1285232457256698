"""
Production FastAPI Application

    granian src.main:app --interface asgi --host 0.0.0.0 --port 8100
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from sqlalchemy.engine import make_url

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Reservation Service] Starting up...')

    tracing = TracingConfig(service_name=settings.OTEL_SERVICE_NAME)
    tracing.setup()
    Logger.base.info('📊 [Reservation Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Reservation Service] Dependency injection wired')

    database = container.database()
    tracing.instrument_sqlalchemy(engine=database.engine)
    # PostgreSQL schema is owned by alembic; local SQLite files are created on the fly
    if make_url(database.db_url).get_backend_name() == 'sqlite':
        await database.create_tables()
    Logger.base.info('🗄️  [Reservation Service] Database engine ready + instrumented')

    Logger.base.info('✅ [Reservation Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Reservation Service] Shutting down...')
    await database.dispose()
    tracing.shutdown()
    container.unwire()
    Logger.base.info('👋 [Reservation Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
