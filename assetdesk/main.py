# /assetdesk/main.py
from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import IntegrityError

from assetdesk.app_logging import get_logger
from assetdesk.core.api import router as api_router
from assetdesk.core.config import settings
from assetdesk.core.exceptions import (
    AssetDeskError,
    AuthError,
    ConflictError,
    NotFoundError,
)
from assetdesk.core.models import db_helper

log = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    yield
    # shutdown
    await db_helper.dispose()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid data", "errors": jsonable_encoder(exc.errors())},
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> ORJSONResponse:
    log.info({"event": "integrity_error", "path": request.url.path, "error": str(exc.orig)})
    return ORJSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Conflict with existing data"},
    )


async def domain_exception_handler(request: Request, exc: AssetDeskError) -> ORJSONResponse:
    # запасной вариант: обычно доменные ошибки переводятся в HTTP прямо в эндпоинте
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, AuthError):
        code = status.HTTP_401_UNAUTHORIZED
    else:
        code = status.HTTP_400_BAD_REQUEST
    return ORJSONResponse(status_code=code, content={"detail": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    log.error(
        {"event": "unhandled_error", "path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="AssetDesk",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(AssetDeskError, domain_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Экспортируемый объект приложения
main_app = create_app()


if __name__ == "__main__":
    # Запуск: uvicorn assetdesk.main:main_app --reload
    uvicorn.run(
        "assetdesk.main:main_app",
        host=settings.run.host,
        port=settings.run.port,
        reload=True,
    )
