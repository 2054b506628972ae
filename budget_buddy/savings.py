"""The savings goal and contributions towards it.

A contribution is recorded twice: it raises the goal's saved amount and it
is logged as an expense in the ``Savings`` category, so balance views treat
money set aside like any other outflow.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .ledger import append_expense, new_expense_id
from .models import AppData, Category, Expense, SavingsGoal, month_key
from .storage import AppDataStore

logger = logging.getLogger(__name__)


class InsufficientBalanceError(ValueError):
    """Raised when a contribution exceeds the money left this month."""

    def __init__(self, requested: float, available: float):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Not enough money! You only have {available:,.0f} left to spend or save "
            f"(tried to save {requested:,.0f})."
        )


@dataclass
class SavingsContribution:
    expense: Expense
    goal: Optional[SavingsGoal]
    goal_completed: bool = False  # True only on the call that reached the target


def set_goal(store: AppDataStore, name: str, amount: float) -> SavingsGoal:
    """Replace any existing goal with a fresh one.

    Raises:
        ValueError: If the name is blank or the amount is not positive.
    """
    if not name or not name.strip():
        raise ValueError("Goal name cannot be empty")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount <= 0:
        raise ValueError(f"Goal amount must be a positive number, got {amount!r}")
    goal = SavingsGoal(name=name.strip(), amount=amount)
    data = store.load()
    data.savings_goal = goal
    store.save(data)
    logger.info("New savings goal %r for %s", goal.name, goal.amount)
    return goal


def available_balance(data: AppData, today: Optional[date] = None) -> float:
    """Income minus everything recorded this month, savings included."""
    income = data.pocket_money_info.amount or 0
    spent = sum(e.amount for e in data.expenses_for_month(month_key(today or date.today())))
    return income - spent


def add_to_savings(store: AppDataStore, amount: float, today: Optional[date] = None) -> SavingsContribution:
    """Move ``amount`` from this month's balance into savings.

    Raises:
        ValueError: If ``amount`` is not positive.
        InsufficientBalanceError: If ``amount`` exceeds the available
            balance. Nothing is recorded in that case.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount <= 0:
        raise ValueError(f"Amount must be a positive number, got {amount!r}")
    today = today or date.today()
    data = store.load()
    available = available_balance(data, today)
    if amount > available:
        raise InsufficientBalanceError(amount, available)

    goal = data.savings_goal
    expense = Expense(
        id=new_expense_id(),
        item=f"Saved for {goal.name if goal else 'Savings'}",
        amount=amount,
        category=Category.SAVINGS,
        date=today.isoformat(),
    )
    append_expense(data, expense)

    completed_now = False
    if goal is not None:
        goal.saved_amount += amount
        if goal.reached and not goal.completed:
            goal.completed = True
            completed_now = True
            logger.info("Savings goal %r reached", goal.name)

    store.save(data)
    return SavingsContribution(expense=expense, goal=goal, goal_completed=completed_now)


def goal_progress(goal: Optional[SavingsGoal]) -> float:
    """Fraction of the target saved, clamped to [0, 1]."""
    if goal is None or goal.amount <= 0:
        return 0.0
    return min(max(goal.saved_amount / goal.amount, 0.0), 1.0)
