"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.cp_admin.api.router import router as admin_router
from src.cp_cards.api.router import router as cards_router
from src.cp_common.database import engine
from src.cp_common.errors import AppError, InvalidRequestError
from src.cp_common.redis_client import close_redis, get_redis
from src.cp_common.response import error_response
from src.cp_gateway.api.router import router as auth_router
from src.cp_gateway.api.users_router import router as users_router
from src.cp_gateway.middleware.request_log import RequestLogMiddleware
from src.cp_history.api.router import router as history_router
from src.cp_portfolio.api.router import router as portfolio_router

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the DB (and Redis when it backs the user locks). Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    if settings.USER_LOCK_BACKEND == "redis":
        await get_redis()
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version=APP_VERSION,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Rejected input is not echoed: Infinity and NaN have no strict-JSON encoding
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return await app_error_handler(request, InvalidRequestError(detail))


app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(cards_router, prefix="/api/v1")
app.include_router(portfolio_router, prefix="/api/v1")
app.include_router(history_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": APP_VERSION}
