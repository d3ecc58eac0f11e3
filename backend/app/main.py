"""MyExpenses API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ExpensesError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage initialized (and schema created once) on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: ExpensesError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import expenses, health
from app.config import get_settings
from app.infrastructure.observability import register_request_logging, setup_logging
from app.infrastructure.storage import init_storage, shutdown_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    await init_storage(settings)
    logger.info("MyExpenses API started")
    yield
    await shutdown_storage()
    logger.info("MyExpenses API shutting down")


app = FastAPI(
    title="MyExpenses API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_request_logging(app)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(expenses.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
