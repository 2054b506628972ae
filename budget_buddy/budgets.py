"""Category budgets, over-budget detection and the daily budget streak."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Set

import pandas as pd

from .models import BudgetStreak, Category, CategoryBudgets, Expense, month_key
from .storage import AppDataStore

logger = logging.getLogger(__name__)

NEAR_LIMIT_PERCENT = 80
STATUS_COLUMNS = ['Category', 'Budget', 'Spent', 'Remaining', 'Percentage', 'Is Over', 'Near Limit']


def save_category_budgets(store: AppDataStore, budgets: Mapping) -> CategoryBudgets:
    """Replace the stored category budgets with ``budgets``.

    Keys may be ``Category`` members or their names; values are coerced to
    float.  A missing or non-positive value means "no limit".

    Raises:
        ValueError: If a value is not numeric.
    """
    normalized: CategoryBudgets = {}
    for key, value in budgets.items():
        try:
            normalized[Category.parse(key)] = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Budget for {key} must be a number, got {value!r}") from exc
    data = store.load()
    data.category_budgets = normalized
    store.save(data)
    return normalized


def active_limits(budgets: Optional[CategoryBudgets]) -> Dict[Category, float]:
    """Only the categories with a positive limit."""
    return {category: limit for category, limit in (budgets or {}).items() if limit and limit > 0}


def spend_by_category(expenses: Iterable[Expense]) -> Dict[Category, float]:
    totals: Dict[Category, float] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0) + expense.amount
    return totals


def budget_status(expenses: Iterable[Expense], budgets: Optional[CategoryBudgets]) -> pd.DataFrame:
    """Spending against each positive category limit.

    Args:
        expenses: The month's expenses.
        budgets: Category limits; non-positive limits are ignored.

    Returns:
        DataFrame with one row per limited category and the columns
        ``Category, Budget, Spent, Remaining, Percentage, Is Over, Near Limit``,
        in category declaration order.
    """
    limits = active_limits(budgets)
    if not limits:
        return pd.DataFrame(columns=STATUS_COLUMNS)

    spent = spend_by_category(expenses)
    rows = []
    for category in Category:
        if category not in limits:
            continue
        limit = limits[category]
        used = spent.get(category, 0)
        percentage = used / limit * 100
        is_over = used > limit
        rows.append({
            'Category': category,
            'Budget': limit,
            'Spent': used,
            'Remaining': limit - used,
            'Percentage': percentage,
            'Is Over': is_over,
            'Near Limit': (not is_over) and percentage > NEAR_LIMIT_PERCENT,
        })
    return pd.DataFrame(rows, columns=STATUS_COLUMNS)


class OverBudgetMonitor:
    """Reports a category once when it goes from within budget to over it.

    The monitor keeps the set of categories seen over budget.  Categories
    that stay over are not reported again; a category that falls back under
    its limit is re-armed.  State is per session and never persisted.
    """

    def __init__(self) -> None:
        self._over: Set[Category] = set()

    @property
    def over(self) -> Set[Category]:
        return set(self._over)

    def check(self, status: pd.DataFrame) -> List[Category]:
        """Return the categories that newly went over budget."""
        if status.empty:
            currently_over: Set[Category] = set()
        else:
            currently_over = set(status.loc[status['Is Over'].astype(bool), 'Category'])
        newly_over = [category for category in Category if category in currently_over - self._over]
        self._over = currently_over
        return newly_over

    def reset(self) -> None:
        self._over.clear()


def evaluate_streak(streak: BudgetStreak, spent: float, income: Optional[float], today: date) -> BudgetStreak:
    """Apply today's streak rule to ``streak`` and return the new value.

    A streak already checked today is returned unchanged.
    """
    today_str = today.isoformat()
    if streak.last_checked_date == today_str:
        return streak
    if spent <= (income or 0):
        yesterday = (today - timedelta(days=1)).isoformat()
        count = streak.count + 1 if streak.last_checked_date == yesterday else 1
    else:
        count = 0
    return BudgetStreak(count=count, last_checked_date=today_str)


def update_streak(store: AppDataStore, today: Optional[date] = None) -> BudgetStreak:
    """Run the once-a-day streak check and persist the result.

    Month-to-date spend (savings included) is compared with the income
    amount; an unset income counts as zero.
    """
    today = today or date.today()
    data = store.load()
    if data.budget_streak.last_checked_date == today.isoformat():
        return data.budget_streak
    spent = sum(e.amount for e in data.expenses_for_month(month_key(today)))
    data.budget_streak = evaluate_streak(data.budget_streak, spent, data.pocket_money_info.amount, today)
    store.save(data)
    logger.info("Budget streak for %s is %d", today, data.budget_streak.count)
    return data.budget_streak


def streak_message(count: int) -> str:
    if count >= 7:
        return "Incredible! You're a saving champion!"
    if count >= 3:
        return "Awesome! You're building a great habit!"
    if count > 0:
        return "You're on the right track, keep it up!"
    return "Start a new streak by staying under budget today!"
