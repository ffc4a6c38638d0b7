"""FastAPI dependencies for authentication and database."""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.models.user import User
from src.services.errors import NotFoundError
from src.services.expenses import ExpenseStore
from src.services.sessions import SessionStore, should_renew
from src.services.statistics import StatisticsService

logger = logging.getLogger(__name__)


class LoginRequired(Exception):
    """Raised when a request has no valid session; answered with a redirect to login."""

    def __init__(self, clear_cookie: bool = False):
        super().__init__("Login required")
        self.clear_cookie = clear_cookie


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Issue the session cookie with a full session lifetime."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_duration_seconds,
        path="/",
        httponly=True,
        secure=settings.secure_cookie,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Tell the client to drop its session cookie."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.secure_cookie,
        samesite="lax",
    )


def get_session_store(
    db: Annotated[Session, Depends(get_db)],
) -> SessionStore:
    """Get session store for the request's database session."""
    return SessionStore(db)


def get_current_user(
    request: Request,
    response: Response,
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """Authenticate the request from its session cookie.

    Sessions past the halfway point of their lifetime are renewed and the
    cookie is reissued. A failed renewal is logged and the still-valid
    session is used as is.
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise LoginRequired()

    try:
        info = store.validate_session_with_info(token)
    except NotFoundError:
        raise LoginRequired(clear_cookie=True) from None

    user_id = info.user.id
    now = store.now()
    duration = timedelta(days=settings.session_duration_days)
    if should_renew(info.expires_at, now, duration):
        try:
            store.renew_session(token, now + duration)
        except SQLAlchemyError as e:
            store.db.rollback()
            logger.warning(f"Session renewal failed for user {user_id}: {e}")
        else:
            set_session_cookie(response, token, settings)
            # Read by the error handlers, whose responses replace this one
            request.state.renewed_session_token = token

    request.state.user = info.user
    return info.user


def get_expense_store(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ExpenseStore:
    """Get expense store scoped to the authenticated user."""
    return ExpenseStore(db, current_user.id)


def get_statistics_service(
    store: Annotated[ExpenseStore, Depends(get_expense_store)],
) -> StatisticsService:
    """Get statistics service with dependencies."""
    return StatisticsService(store)
