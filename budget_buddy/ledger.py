"""Expense records partitioned by month.

Every operation loads the whole record, changes one thing and saves it back.
An expense always lives in the partition named by the first seven characters
of its date.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Tuple

from .defaults import DEFAULT_CATEGORY_BUDGETS
from .models import AppData, BudgetStreak, Category, DateLike, Expense, iso_date, month_key
from .storage import AppDataStore

logger = logging.getLogger(__name__)


def new_expense_id() -> str:
    """Timestamp plus random suffix; unique for the lifetime of a store."""
    return f"{datetime.now().isoformat()}-{uuid.uuid4().hex[:12]}"


def validate_expense_input(item: str, amount: float, date: DateLike) -> str:
    """Check user input for a new or edited expense.

    Returns:
        The date normalised to ``YYYY-MM-DD``.

    Raises:
        ValueError: If the item is blank, the amount is not positive or the
            date is not a valid calendar date.
    """
    if not item or not str(item).strip():
        raise ValueError("Item name cannot be empty")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount <= 0:
        raise ValueError(f"Amount must be a positive number, got {amount!r}")
    try:
        return iso_date(date)
    except ValueError as exc:
        raise ValueError(f"Invalid expense date {date!r}: expected YYYY-MM-DD") from exc


def append_expense(data: AppData, expense: Expense) -> None:
    """Place ``expense`` in its month partition of ``data``."""
    data.all_expenses.setdefault(expense.month, []).append(expense)


def locate_expense(data: AppData, expense_id: str) -> Optional[Tuple[str, int]]:
    """Return ``(month, index)`` of the first expense with ``expense_id``."""
    for month, expenses in data.all_expenses.items():
        for index, expense in enumerate(expenses):
            if expense.id == expense_id:
                return month, index
    return None


def pop_expense(data: AppData, expense_id: str) -> Optional[Expense]:
    """Remove and return the first expense with ``expense_id``, if any."""
    location = locate_expense(data, expense_id)
    if location is None:
        return None
    month, index = location
    removed = data.all_expenses[month].pop(index)
    if not data.all_expenses[month]:
        del data.all_expenses[month]
    return removed


class ExpenseLedger:
    """CRUD access to expenses held in an ``AppDataStore``."""

    def __init__(self, store: AppDataStore):
        self.store = store

    def add_expense(self, item: str, amount: float, category: Category, date: DateLike) -> Expense:
        """Record a new expense and return it.

        Raises:
            ValueError: If the input is invalid.
        """
        normalized_date = validate_expense_input(item, amount, date)
        expense = Expense(
            id=new_expense_id(),
            item=str(item).strip(),
            amount=amount,
            category=Category.parse(category),
            date=normalized_date,
        )
        data = self.store.load()
        append_expense(data, expense)
        self.store.save(data)
        logger.debug("Added expense %s to %s", expense.id, expense.month)
        return expense

    def update_expense(self, expense: Expense) -> bool:
        """Replace the stored expense with the same id.

        The record is found in whichever month it currently lives in and
        moved if its date now belongs to another month.

        Returns:
            True if the expense was found and updated, False otherwise.

        Raises:
            ValueError: If the updated fields are invalid.
        """
        normalized_date = validate_expense_input(expense.item, expense.amount, expense.date)
        updated = replace(
            expense,
            item=expense.item.strip(),
            category=Category.parse(expense.category),
            date=normalized_date,
        )
        data = self.store.load()
        location = locate_expense(data, updated.id)
        if location is None:
            return False
        month, index = location
        if month == updated.month:
            data.all_expenses[month][index] = updated
        else:
            pop_expense(data, updated.id)
            append_expense(data, updated)
            logger.debug("Moved expense %s from %s to %s", updated.id, month, updated.month)
        self.store.save(data)
        return True

    def delete_expense(self, expense_id: str) -> bool:
        """Delete the expense with ``expense_id``; no-op when absent."""
        data = self.store.load()
        if pop_expense(data, expense_id) is None:
            return False
        self.store.save(data)
        return True

    def get_expenses_for_month(self, month: str) -> List[Expense]:
        """Return a copy of the expenses recorded under ``month``."""
        return list(self.store.load().expenses_for_month(month_key(month)))

    def get_all_expenses(self) -> List[Expense]:
        """Return live ledger expenses followed by archived ones.

        Archived copies of records still present in the ledger are skipped.
        """
        data = self.store.load()
        combined = [e for expenses in data.all_expenses.values() for e in expenses]
        seen = {e.id for e in combined}
        for archive in data.archived_months:
            for expense in archive.expenses:
                if expense.id not in seen:
                    combined.append(expense)
                    seen.add(expense.id)
        return combined

    def reset_month(self, month: str) -> None:
        """Drop a month's expenses and restore default budgets and streak."""
        data = self.store.load()
        data.all_expenses.pop(month_key(month), None)
        data.category_budgets = dict(DEFAULT_CATEGORY_BUDGETS)
        data.budget_streak = BudgetStreak()
        self.store.save(data)
        logger.info("Reset data for %s", month)

