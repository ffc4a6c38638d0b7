"""Expense schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from src.models.enums import EntryKind
from src.schemas.category import CategoryStyle
from src.services.categories import CATEGORIES, get_category


class ExpenseCreate(BaseModel):
    """Create a new expense."""

    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    description: str = Field("", max_length=2000)
    category: str = Field("other", max_length=50)
    date: datetime
    kind: EntryKind | None = None

    @field_validator("description")
    @classmethod
    def strip_description(cls, value: str) -> str:
        return value.strip()

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in CATEGORIES:
            raise ValueError(f"Unknown category '{value}'")
        return normalized

    @field_validator("date")
    @classmethod
    def to_local_wall_clock(cls, value: datetime) -> datetime:
        # Expenses are stored as naive server-local time
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value


class ExpenseUpdate(ExpenseCreate):
    """Replace every editable field of an expense."""

    description: str = Field(..., max_length=2000)
    category: str = Field(..., max_length=50)


class ExpenseResponse(BaseModel):
    """Expense response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: Decimal
    description: str
    category: str
    kind: EntryKind
    date: datetime
    user_id: int | None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_income(self) -> bool:
        return self.kind == EntryKind.INCOME

    @computed_field  # type: ignore[prop-decorator]
    @property
    def style(self) -> CategoryStyle:
        definition = get_category(self.category)
        return CategoryStyle(icon=definition.icon, color=definition.color)


class ExpenseGroupResponse(BaseModel):
    """Expenses of one calendar day."""

    model_config = ConfigDict(from_attributes=True)

    date: str
    title: str
    total: Decimal
    expenses: list[ExpenseResponse]


class ExpenseListResponse(BaseModel):
    """Current month's expenses grouped by day."""

    total: Decimal
    groups: list[ExpenseGroupResponse]
