"""Authentication service for password handling and user accounts."""

import logging
import secrets

from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.user import User
from src.services.errors import ConflictError

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_TOKEN_BYTES = 32


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Malformed or unrecognised hashes count as a mismatch.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def generate_session_token() -> str:
    """Create a random, URL-safe session token."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Authenticate a user by username and password."""
    user = get_user_by_username(db, username)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username (case-sensitive)."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def count_users(db: Session) -> int:
    """Count registered users."""
    return db.query(func.count(User.id)).scalar() or 0


def create_user(db: Session, username: str, password_hash: str) -> User:
    """Create a new user from an already hashed password."""
    if get_user_by_username(db, username):
        raise ConflictError(f"user {username} already exists")

    user = User(username=username, password_hash=password_hash)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"user {username} already exists") from e
    db.refresh(user)
    return user


def bootstrap_admin(db: Session, username: str | None, password: str | None) -> User | None:
    """Create the initial admin account when the user table is empty.

    Returns the created user, or None when nothing was done.
    """
    if not username or not password:
        return None
    if count_users(db) > 0:
        return None

    user = create_user(db, username, get_password_hash(password))
    logger.info(f"Created initial admin user '{username}'")
    return user
