"""Statistics API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_statistics_service
from src.models.enums import StatsViewMode
from src.schemas.statistics import StatisticsView
from src.services.statistics import StatisticsService

router = APIRouter(prefix="/api/v1/statistics", tags=["statistics"])


@router.get("", response_model=StatisticsView)
def get_statistics(
    service: Annotated[StatisticsService, Depends(get_statistics_service)],
    view: StatsViewMode = StatsViewMode.MONTH,
    year: Annotated[int | None, Query(ge=2, le=9998)] = None,
    month: int | None = None,
):
    """Get month or year statistics, defaulting to the current period.

    Month values outside 1..12 are ignored in favour of the current month.
    """
    now = service.clock()
    year = year or now.year
    if month is None or not 1 <= month <= 12:
        month = now.month

    if view == StatsViewMode.YEAR:
        return service.build_year_view(year)
    return service.build_month_view(year, month)
