"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import UserLogin, UserResponse
from src.schemas.category import CategoryResponse, CategoryStyle
from src.schemas.expense import (
    ExpenseCreate,
    ExpenseGroupResponse,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseUpdate,
)
from src.schemas.statistics import CategoryBreakdown, ChartPoint, StatisticsView

__all__ = [
    "UserLogin",
    "UserResponse",
    "CategoryResponse",
    "CategoryStyle",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "ExpenseGroupResponse",
    "ExpenseListResponse",
    "CategoryBreakdown",
    "ChartPoint",
    "StatisticsView",
]
