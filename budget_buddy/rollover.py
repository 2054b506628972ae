"""Month-boundary detection and archiving of completed months."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from .models import AppData, ArchivedMonth, CategoryBudgets, Expense, month_key
from .storage import AppDataStore

logger = logging.getLogger(__name__)


@dataclass
class RolloverResult:
    current_month: str
    previous_month: Optional[str] = None
    archived: bool = False


def put_archive(data: AppData, archive: ArchivedMonth) -> None:
    """Insert or replace the archive for ``archive.month``, newest first."""
    data.archived_months = [a for a in data.archived_months if a.month != archive.month]
    data.archived_months.append(archive)
    data.archived_months.sort(key=lambda a: a.month, reverse=True)


def archive_month(
    store: AppDataStore,
    month: str,
    pocket_money: float,
    expenses: List[Expense],
    category_budgets: Optional[CategoryBudgets] = None,
) -> ArchivedMonth:
    """Store a snapshot of ``month``, replacing any earlier snapshot of it."""
    archive = ArchivedMonth(
        month=month,
        pocket_money=pocket_money,
        expenses=list(expenses),
        category_budgets=dict(category_budgets) if category_budgets is not None else None,
    )
    data = store.load()
    put_archive(data, archive)
    store.save(data)
    return archive


def run_rollover(store: AppDataStore, today: Optional[date] = None) -> RolloverResult:
    """Archive the last seen month if the calendar month has changed.

    The previous month is archived when it has at least one expense.  If no
    income amount is set the archive records an income of 0 and a warning is
    logged.  ``lastSeenMonth`` always moves to the current month.
    """
    current = month_key(today or date.today())
    data = store.load()
    previous = data.last_seen_month
    result = RolloverResult(current_month=current, previous_month=previous)

    if previous and previous != current:
        expenses = data.expenses_for_month(previous)
        if expenses:
            income = data.pocket_money_info.amount
            if income is None:
                logger.warning("No income set while archiving %s; recording income as 0", previous)
                income = 0
            put_archive(data, ArchivedMonth(
                month=previous,
                pocket_money=income,
                expenses=list(expenses),
                category_budgets=dict(data.category_budgets),
            ))
            result.archived = True
            logger.info("Archived %d expenses for %s", len(expenses), previous)

    if previous != current:
        data.last_seen_month = current
        store.save(data)
    return result
