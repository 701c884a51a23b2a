from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from georef.config import settings
from georef.db.session import shutdown
from georef.dependencies import DB
from georef.exceptions import ErrorMessage, HttpError
from georef.logging import get_logger
from georef.middleware import RequestIDMiddleware
from georef.routers import city, route

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close pooled database connections on shutdown."""
    yield
    await shutdown()


app = FastAPI(title="Geo-reference API", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(city.router, prefix=settings.api_prefix)
app.include_router(route.router, prefix=settings.api_prefix)
app.include_router(route.status_router, prefix=settings.api_prefix)


@app.exception_handler(HttpError)
async def http_error_handler(request: Request, exc: HttpError) -> JSONResponse:
    """Render a classified failure raised by a service."""
    if exc.status >= 500:
        logger.warning("http_error", status=exc.status, error=exc.message, path=request.url.path)
    return exc.into_response()


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return request validation failures as a 400 in the standard envelope."""
    message = ", ".join(str(error["msg"]) for error in exc.errors())
    return HttpError.bad_request(message or "Invalid request").into_response()


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return the canonical server error.

    The traceback is logged with the request_id bound by the middleware;
    the client only sees the SERVER_ERROR message and hint.
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return HttpError.from_error_message(ErrorMessage.SERVER_ERROR).into_response()


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Health check; 200 only if the database answers a ping query."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
