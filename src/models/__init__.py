"""SQLAlchemy models."""

from src.models.expense import Expense
from src.models.session import AuthSession
from src.models.user import User

__all__ = [
    "User",
    "AuthSession",
    "Expense",
]
