"""Expense model."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import EntryKind
from src.models.mixins import TimestampMixin


class Expense(Base, TimestampMixin):
    """A single money movement. Negative amounts are refunds or income."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    kind = Column(
        Enum(EntryKind, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=EntryKind.EXPENSE,
        server_default=EntryKind.EXPENSE.value,
    )
    date = Column(DateTime, nullable=False, index=True)  # wall-clock time as entered
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    # Relationships
    user = relationship("User", back_populates="expenses")
