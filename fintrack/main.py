"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from fintrack.api import auth, details
from fintrack.config import get_settings
from fintrack.database import check_connection, get_db, ping
from fintrack.errors import AppError

settings = get_settings()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    # The service is useless without storage, so refuse to start without it
    try:
        check_connection()
    except SQLAlchemyError as e:
        logger.critical(f"Database connection error: {e}")
        raise SystemExit(1) from e
    logger.info("Connected to database")
    yield


app = FastAPI(
    title="FinTrack Onboarding API",
    description="Investor onboarding with password and Google sign-in",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request line and its status. Bodies are never logged."""
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert application errors to the standard failure envelope."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(exc.to_dict(), status_code=exc.status_code, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report every invalid or missing body field in one 400 response."""
    fields = []
    for error in exc.errors():
        # Drop the 'body' prefix and list indexes from the location
        loc = [str(part) for part in error["loc"] if part != "body" and not isinstance(part, int)]
        field = ".".join(loc) or "body"
        if field not in fields:
            fields.append(field)
    return JSONResponse(
        {
            "success": False,
            "message": f"Invalid or missing fields: {', '.join(fields)}",
            "errors": fields,
        },
        status_code=400,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Convert routing and framework HTTP errors to the standard envelope."""
    if exc.status_code == 404:
        logger.warning(f"Route not found: {request.method} {request.url.path}")
        body = {
            "success": False,
            "message": "API endpoint not found",
            "path": request.url.path,
            "method": request.method,
        }
    else:
        body = {"success": False, "message": str(exc.detail)}
    return JSONResponse(body, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected errors; details stay in the server log."""
    logger.exception(f"Server error on {request.method} {request.url.path}: {exc}")
    return JSONResponse({"success": False, "message": "Internal server error"}, status_code=500)


# Register routers
app.include_router(auth.router)
app.include_router(details.router)


@app.get("/api/health")
async def health_check(db: Annotated[Session, Depends(get_db)]):
    """Health check endpoint."""
    return {
        "success": True,
        "status": "OK",
        "timestamp": datetime.now(UTC).isoformat(),
        "storageConnected": ping(db),
    }


def run() -> None:
    """Run the API with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run("fintrack.main:app", host="0.0.0.0", port=settings.port)  # noqa: S104


if __name__ == "__main__":
    run()
