"""Statistics view schemas."""

from decimal import Decimal

from pydantic import BaseModel

from src.models.enums import StatsViewMode
from src.schemas.category import CategoryStyle
from src.schemas.expense import ExpenseResponse


class ChartPoint(BaseModel):
    """One bar of the spending chart. Unlabelled points have an empty label."""

    label: str
    value: Decimal


class CategoryBreakdown(BaseModel):
    """Spending of one category within the period."""

    category: str
    name: str
    total: Decimal
    count: int
    percentage: float
    style: CategoryStyle


class StatisticsView(BaseModel):
    """Month or year statistics.

    ``percentage_change`` is only meaningful when ``has_change`` is true; it is
    0 when the previous period had nothing to compare against.
    """

    view_mode: StatsViewMode
    year: int
    month: int | None
    period_name: str
    total: Decimal
    percentage_change: float
    is_increase: bool
    has_change: bool
    average_spending: Decimal
    average_label: str
    categories: list[CategoryBreakdown]
    expenses: list[ExpenseResponse]
    chart_data: list[ChartPoint]
    max_chart_value: Decimal
    prev_year: int
    prev_month: int | None
    next_year: int
    next_month: int | None
    is_current_period: bool
