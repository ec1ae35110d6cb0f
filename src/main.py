"""
Production FastAPI Application

Serves the event, spot and reservation API (`uvicorn src.main:app`).
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Event Spot Sales] Starting up...')

    tracing = TracingConfig(service_name='event-spot-sales')
    tracing.setup()
    Logger.base.info('📊 [Event Spot Sales] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Event Spot Sales] Dependency injection wired')

    database = container.database()
    tracing.instrument_sqlalchemy(engine=database.engine)
    Logger.base.info('🗄️  [Event Spot Sales] Database engine ready + instrumented')

    Logger.base.info('✅ [Event Spot Sales] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Event Spot Sales] Shutting down...')

    await database.dispose()
    Logger.base.info('🗄️  [Event Spot Sales] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Event Spot Sales] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [Event Spot Sales] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
