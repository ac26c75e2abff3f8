import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from src.adapter.services.notifiers import close_notifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.admin import CleanupExpiredTokensUseCase
from src.depends import AsyncSessionLocal
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = exc.to_dict()
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = exc.to_dict()
    logger.error(f"Server error: {exc.base_error.code} - {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def sweep_expired_tokens_periodically(interval_minutes: int):
    """Run the expired-token sweep every `interval_minutes` until cancelled"""
    while True:
        await asyncio.sleep(interval_minutes * 60)
        try:
            async with AsyncSessionLocal() as session:
                await CleanupExpiredTokensUseCase(SqlAlchemyUnitOfWork(session)).execute()
        except Exception:
            # Next tick retries
            logger.exception("Expired token sweep failed")


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = None
        if ApplicationConfig.TOKEN_CLEANUP_INTERVAL_MINUTES > 0:
            sweeper = asyncio.create_task(
                sweep_expired_tokens_periodically(
                    ApplicationConfig.TOKEN_CLEANUP_INTERVAL_MINUTES
                )
            )
        yield
        if sweeper is not None:
            sweeper.cancel()
            with suppress(asyncio.CancelledError):
                await sweeper
        await close_notifier()

    app = FastAPI(title="Credential Service", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, health_check, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
