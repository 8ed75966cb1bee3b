import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from src.api.error import register_error_handlers
from src.api.routes import enrollments, invoices, payments, students

logger = logging.getLogger(__name__)


async def init_schema() -> None:
    """Create missing tables and the settings row"""
    from src.depends import AsyncSessionLocal, engine
    from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        await SqlAlchemySettingsRepository(session).get_or_create()
        await session.commit()


def create_app(config) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.CREATE_SCHEMA_ON_STARTUP:
            await init_schema()
            logger.info("Database schema ready")
        yield

    app = FastAPI(
        title="Lesson School Billing",
        description="Monthly invoicing and payment tracking for a lesson school",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
            )
            return response

    register_error_handlers(app)

    for module in (invoices, payments, students, enrollments):
        app.include_router(module.router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
