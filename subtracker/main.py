"""
FastAPI application factory
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from subtracker.config import get_settings
from subtracker.domain.errors import StorageError, SubscriptionNotFound, SubscriptionValidationError
from subtracker.infrastructure.db.session import check_db_connection, dispose_engine, init_db
from subtracker.middleware.request_logging import RequestLoggingMiddleware
from subtracker.api.v1 import subscriptions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.DB_AUTO_CREATE:
        init_db()
    logger.info("Subscription service started")
    yield
    dispose_engine()
    logger.info("Subscription service stopped")


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(SubscriptionValidationError)
    async def subscription_validation_error(request: Request, exc: SubscriptionValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(SubscriptionNotFound)
    async def subscription_not_found(request: Request, exc: SubscriptionNotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "internal storage error"})


def create_app() -> FastAPI:
    """
    Application factory - создаёт и настраивает FastAPI приложение

    Returns:
        Настроенный FastAPI app
    """
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Subscription Service API",
        description="API для управления онлайн-подписками пользователей",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    _register_error_handlers(app)

    app.include_router(subscriptions.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (проверяет доступность БД)"""
        check_db_connection()
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "subtracker.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
    )
