"""Authentication API endpoints."""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.api.dependencies import (
    clear_session_cookie,
    get_current_user,
    get_session_store,
    set_session_cookie,
)
from src.config import Settings, get_settings
from src.database import get_db
from src.models.user import User
from src.schemas.auth import UserLogin, UserResponse
from src.services.auth import authenticate_user, generate_session_token
from src.services.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=UserResponse)
def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with username and password, starting a cookie session."""
    user = authenticate_user(db, credentials.username.strip(), credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    token = generate_session_token()
    expires_at = store.now() + timedelta(days=settings.session_duration_days)
    store.create_session(token, user.id, expires_at)

    set_session_cookie(response, token, settings)
    return user


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Logout: delete the server-side session and clear the cookie."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        try:
            store.delete_session(token)
        except SQLAlchemyError as e:
            store.db.rollback()
            logger.error(f"Failed to delete session: {e}")

    clear_session_cookie(response, settings)
    return {"message": "Logged out successfully"}
