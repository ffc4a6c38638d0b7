"""Expense store: per-user CRUD and the aggregate reads behind statistics."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import extract, func
from sqlalchemy.orm import Query, Session

from src.models.enums import EntryKind
from src.models.expense import Expense
from src.services.errors import NotFoundError
from src.services.periods import Period, start_of_month

INCOME_MARKER = "[Income]"
DEFAULT_DESCRIPTION = "Expense"


@dataclass(frozen=True)
class CategoryTotal:
    """Sum and number of entries of one category within a period."""

    category: str
    total: Decimal
    count: int


def to_decimal(value: object) -> Decimal:
    """Normalize a SUM() result, which may be None, int, float or Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def derive_kind(description: str) -> EntryKind:
    """Classify an entry from its description when no kind was given."""
    return EntryKind.INCOME if INCOME_MARKER in description else EntryKind.EXPENSE


class ExpenseStore:
    """Expense persistence scoped to a single user.

    ``clock`` returns server-local wall-clock time; month boundaries are
    computed from it.
    """

    def __init__(
        self,
        db: Session,
        user_id: int,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.user_id = user_id
        self.clock = clock

    def _query(self) -> Query:
        return self.db.query(Expense).filter(Expense.user_id == self.user_id)

    def _in_period(self, query: Query, period: Period) -> Query:
        return query.filter(Expense.date >= period.start, Expense.date < period.end)

    def create_expense(
        self,
        amount: Decimal,
        description: str,
        category: str,
        date: datetime | None = None,
        kind: EntryKind | None = None,
    ) -> Expense:
        """Record a new entry. A missing date means "now"."""
        description = description or DEFAULT_DESCRIPTION
        expense = Expense(
            amount=amount,
            description=description,
            category=category,
            kind=kind or derive_kind(description),
            date=date or self.clock(),
            user_id=self.user_id,
        )
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        return expense

    def get_expense(self, expense_id: int) -> Expense:
        """Get one of the user's expenses by ID."""
        expense = self._query().filter(Expense.id == expense_id).first()
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    def update_expense(
        self,
        expense_id: int,
        amount: Decimal,
        description: str,
        category: str,
        date: datetime,
        kind: EntryKind | None = None,
    ) -> Expense:
        """Overwrite every editable field of an existing expense."""
        expense = self.get_expense(expense_id)

        description = description or DEFAULT_DESCRIPTION
        expense.amount = amount
        expense.description = description
        expense.category = category
        expense.kind = kind or derive_kind(description)
        expense.date = date

        self.db.commit()
        self.db.refresh(expense)
        return expense

    def list_expenses(self) -> list[Expense]:
        """Expenses since the start of the current calendar month, newest first."""
        since = start_of_month(self.clock())
        return (
            self._query()
            .filter(Expense.date >= since)
            .order_by(Expense.date.desc(), Expense.id.desc())
            .all()
        )

    def expenses_for_period(self, period: Period) -> list[Expense]:
        """All expenses within a period, newest first."""
        return (
            self._in_period(self._query(), period)
            .order_by(Expense.date.desc(), Expense.id.desc())
            .all()
        )

    def category_totals(self, period: Period) -> list[CategoryTotal]:
        """Sum and count per category, largest total first."""
        total = func.sum(Expense.amount).label("total")
        rows = self._in_period(
            self.db.query(Expense.category, total, func.count(Expense.id))
            .filter(Expense.user_id == self.user_id),
            period,
        ).group_by(Expense.category).order_by(total.desc(), Expense.category).all()

        return [
            CategoryTotal(category=category, total=to_decimal(amount), count=count)
            for category, amount, count in rows
        ]

    def daily_totals(self, period: Period) -> dict[int, Decimal]:
        """Sum per day of month. Days without expenses are omitted."""
        return self._totals_by(extract("day", Expense.date), period)

    def monthly_totals(self, period: Period) -> dict[int, Decimal]:
        """Sum per month number. Months without expenses are omitted."""
        return self._totals_by(extract("month", Expense.date), period)

    def _totals_by(self, bucket, period: Period) -> dict[int, Decimal]:
        bucket = bucket.label("bucket")
        rows = self._in_period(
            self.db.query(bucket, func.sum(Expense.amount))
            .filter(Expense.user_id == self.user_id),
            period,
        ).group_by(bucket).all()
        return {int(key): to_decimal(amount) for key, amount in rows}

    def total_for_period(self, period: Period) -> Decimal:
        """Sum of every amount in a period."""
        amount = self._in_period(
            self.db.query(func.sum(Expense.amount)).filter(Expense.user_id == self.user_id),
            period,
        ).scalar()
        return to_decimal(amount)


@dataclass
class ExpenseGroup:
    """Expenses sharing one calendar day."""

    date: str
    title: str
    total: Decimal
    expenses: list[Expense]


def format_group_title(day: datetime, today: datetime) -> str:
    """TODAY, YESTERDAY, or a date such as ``FRI, 15 MAR '24``."""
    if day.date() == today.date():
        return "TODAY"
    if day.date() == (today - timedelta(days=1)).date():
        return "YESTERDAY"
    return day.strftime("%a, %d %b '%y").upper()


def group_expenses_by_day(expenses: list[Expense], today: datetime) -> list[ExpenseGroup]:
    """Group expenses by calendar day, most recent day first."""
    groups: dict[str, ExpenseGroup] = {}
    for expense in expenses:
        key = expense.date.strftime("%Y-%m-%d")
        group = groups.get(key)
        if group is None:
            group = ExpenseGroup(
                date=key,
                title=format_group_title(expense.date, today),
                total=Decimal("0"),
                expenses=[],
            )
            groups[key] = group
        group.total += to_decimal(expense.amount)
        group.expenses.append(expense)

    return sorted(groups.values(), key=lambda g: g.date, reverse=True)
