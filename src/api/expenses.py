"""Expense API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_expense_store
from src.schemas.expense import (
    ExpenseCreate,
    ExpenseGroupResponse,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseUpdate,
)
from src.services.expenses import ExpenseStore, group_expenses_by_day, to_decimal

router = APIRouter(prefix="/api/v1/expenses", tags=["expenses"])


@router.get("", response_model=ExpenseListResponse)
def list_expenses(
    store: Annotated[ExpenseStore, Depends(get_expense_store)],
):
    """Get this month's expenses grouped by day, newest day first."""
    expenses = store.list_expenses()
    groups = group_expenses_by_day(expenses, today=store.clock())

    return ExpenseListResponse(
        total=sum((to_decimal(e.amount) for e in expenses), start=to_decimal(0)),
        groups=[ExpenseGroupResponse.model_validate(group) for group in groups],
    )


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense_data: ExpenseCreate,
    store: Annotated[ExpenseStore, Depends(get_expense_store)],
):
    """Record a new expense."""
    return store.create_expense(
        amount=expense_data.amount,
        description=expense_data.description,
        category=expense_data.category,
        date=expense_data.date,
        kind=expense_data.kind,
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    store: Annotated[ExpenseStore, Depends(get_expense_store)],
):
    """Get a specific expense."""
    return store.get_expense(expense_id)


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    store: Annotated[ExpenseStore, Depends(get_expense_store)],
):
    """Replace an expense's amount, description, category, kind and date."""
    return store.update_expense(
        expense_id,
        amount=expense_data.amount,
        description=expense_data.description,
        category=expense_data.category,
        date=expense_data.date,
        kind=expense_data.kind,
    )
