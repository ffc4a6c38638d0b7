"""Enums for model fields."""

from enum import Enum


class EntryKind(str, Enum):
    """Whether an entry is money going out or coming in."""

    EXPENSE = "expense"
    INCOME = "income"


class ExpenseCategory(str, Enum):
    """Fixed set of expense categories."""

    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    HOUSING = "housing"
    GIFTS = "gifts"
    OTHER = "other"


class StatsViewMode(str, Enum):
    """Aggregation period for the statistics view."""

    MONTH = "month"
    YEAR = "year"
