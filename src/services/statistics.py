"""Statistics engine: month and year rollups with period-over-period change."""

import calendar
import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from src.models.enums import StatsViewMode
from src.schemas.category import CategoryStyle
from src.schemas.expense import ExpenseResponse
from src.schemas.statistics import CategoryBreakdown, ChartPoint, StatisticsView
from src.services.categories import get_category
from src.services.expenses import CategoryTotal, ExpenseStore
from src.services.periods import Period

logger = logging.getLogger(__name__)

MONTH_AVERAGE_LABEL = "SPENT/DAY"
YEAR_AVERAGE_LABEL = "SPENT/MTH"
CENT = Decimal("0.01")


def percentage_change(total: Decimal, previous_total: Decimal) -> tuple[float, bool, bool]:
    """Compare a period total with the previous one.

    Returns ``(change, is_increase, has_change)``. Without a positive previous
    total there is nothing to compare against and the change is reported as 0.
    """
    if previous_total <= 0:
        return 0.0, False, False
    change = float((total - previous_total) / previous_total * 100)
    return abs(change), total > previous_total, True


def category_percentage(category_total: Decimal, period_total: Decimal) -> float:
    """Share of the period total, 0 when the period total is 0."""
    if period_total == 0:
        return 0.0
    return float(category_total / period_total * 100)


def month_chart_label(day: int, last_day: int) -> str:
    """Only days 1, 10, 20 and the last day carry a label."""
    if day in (1, 10, 20, last_day):
        return str(day)
    return ""


def build_month_series(totals: dict[int, Decimal], year: int, month: int) -> list[ChartPoint]:
    """One point per day of the month, zero-filled."""
    last_day = calendar.monthrange(year, month)[1]
    return [
        ChartPoint(label=month_chart_label(day, last_day), value=totals.get(day, Decimal("0")))
        for day in range(1, last_day + 1)
    ]


def build_year_series(totals: dict[int, Decimal]) -> list[ChartPoint]:
    """One point per month, Jan..Dec, zero-filled."""
    return [
        ChartPoint(label=calendar.month_abbr[month], value=totals.get(month, Decimal("0")))
        for month in range(1, 13)
    ]


def build_category_breakdown(
    totals: list[CategoryTotal], period_total: Decimal
) -> list[CategoryBreakdown]:
    breakdown = []
    for item in totals:
        definition = get_category(item.category)
        breakdown.append(
            CategoryBreakdown(
                category=item.category,
                name=definition.name,
                total=item.total,
                count=item.count,
                percentage=category_percentage(item.total, period_total),
                style=CategoryStyle(icon=definition.icon, color=definition.color),
            )
        )
    return breakdown


class StatisticsService:
    """Builds statistics views from a user's expense store.

    Storage errors propagate; a view is either complete or not returned.
    """

    def __init__(self, store: ExpenseStore, clock: Callable[[], datetime] | None = None):
        self.store = store
        self.clock = clock or store.clock

    def build_month_view(self, year: int, month: int) -> StatisticsView:
        """Statistics for one calendar month."""
        period = Period(year, month)
        series = build_month_series(self.store.daily_totals(period), year, month)
        return self._build_view(
            period,
            series=series,
            divisor=period.days,
            average_label=MONTH_AVERAGE_LABEL,
            period_name=calendar.month_name[month],
        )

    def build_year_view(self, year: int) -> StatisticsView:
        """Statistics for one calendar year."""
        period = Period(year)
        series = build_year_series(self.store.monthly_totals(period))
        return self._build_view(
            period,
            series=series,
            divisor=12,
            average_label=YEAR_AVERAGE_LABEL,
            period_name=str(year),
        )

    def _build_view(
        self,
        period: Period,
        series: list[ChartPoint],
        divisor: int,
        average_label: str,
        period_name: str,
    ) -> StatisticsView:
        category_totals = self.store.category_totals(period)
        expenses = self.store.expenses_for_period(period)
        total = self.store.total_for_period(period)

        previous, following = period.previous(), period.next()
        previous_total = self.store.total_for_period(previous)
        change, is_increase, has_change = percentage_change(total, previous_total)

        now = self.clock()
        mode = StatsViewMode.MONTH if period.is_month else StatsViewMode.YEAR
        logger.debug(
            f"Built {mode.value} statistics for {period.year}-{period.month or '*'}: total={total}"
        )

        return StatisticsView(
            view_mode=mode,
            year=period.year,
            month=period.month,
            period_name=period_name,
            total=total,
            percentage_change=change,
            is_increase=is_increase,
            has_change=has_change,
            average_spending=(total / divisor).quantize(CENT),
            average_label=average_label,
            categories=build_category_breakdown(category_totals, total),
            expenses=[ExpenseResponse.model_validate(e) for e in expenses],
            chart_data=series,
            max_chart_value=max([Decimal("0"), *(point.value for point in series)]),
            prev_year=previous.year,
            prev_month=previous.month,
            next_year=following.year,
            next_month=following.month,
            is_current_period=period.contains(now),
        )
