"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from src.api import auth, categories, expenses, statistics
from src.api.dependencies import LoginRequired, clear_session_cookie, set_session_cookie
from src.config import get_settings
from src.database import SessionLocal, init_db
from src.services.auth import bootstrap_admin
from src.services.errors import ConflictError, InvalidError, NotFoundError

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()

    db = SessionLocal()
    try:
        bootstrap_admin(db, settings.admin_user, settings.admin_password)
    finally:
        db.close()

    yield


app = FastAPI(
    title="Expense Tracker API",
    description="Personal expense tracker with rolling cookie sessions and spending statistics",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for a separately served development frontend
if settings.is_development and settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    response = RedirectResponse(settings.login_url, status_code=status.HTTP_302_FOUND)
    if exc.clear_cookie:
        clear_session_cookie(response, settings)
    return response


def error_response(request: Request, status_code: int, detail: str) -> JSONResponse:
    """Build an error response, reissuing a session cookie renewed earlier in the request."""
    response = JSONResponse(status_code=status_code, content={"detail": detail})
    token = getattr(request.state, "renewed_session_token", None)
    if token:
        set_session_cookie(response, token, settings)
    return response


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return error_response(request, status.HTTP_404_NOT_FOUND, exc.message)


@app.exception_handler(InvalidError)
async def invalid_handler(request: Request, exc: InvalidError):
    return error_response(request, status.HTTP_400_BAD_REQUEST, exc.message)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return error_response(request, status.HTTP_409_CONFLICT, exc.message)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Register routers
app.include_router(auth.router)
app.include_router(expenses.router)
app.include_router(statistics.router)
app.include_router(categories.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
