"""Core data types for Budget Buddy.

Everything the app persists is described here as plain dataclasses with
``to_dict``/``from_dict`` helpers that speak the camelCase JSON schema of
the stored record.  The helpers are tolerant: missing or malformed fields
fall back to sensible values instead of raising, so that old or partially
hand-edited files still load.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class Category(str, Enum):
    """Spending categories.  ``SAVINGS`` also marks money set aside."""

    FOOD = 'Food'
    RECHARGE = 'Recharge'
    STATIONERY = 'Stationery'
    ENTERTAINMENT = 'Entertainment'
    FUN = 'Fun'
    TRANSPORT = 'Transport'
    SAVINGS = 'Savings'
    OTHER = 'Other'

    @classmethod
    def parse(cls, value: Any) -> 'Category':
        """Return the category for ``value``, falling back to ``OTHER``."""
        if isinstance(value, cls):
            return value
        text = str(value or '').strip()
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        return cls.OTHER


INCOME_SOURCES = (
    'Monthly Income',
    'Pocket Money',
    'Allowance',
    'Part-Time Job',
    'Gift',
    'Other',
)

THEMES = ('light', 'dark', 'system')

CategoryBudgets = Dict[Category, float]
DateLike = Union[str, date]


def month_key(value: DateLike) -> str:
    """Return the ``YYYY-MM`` partition key for a date or ISO date string."""
    if isinstance(value, (date, datetime)):
        return value.strftime('%Y-%m')
    return str(value)[:7]


def iso_date(value: DateLike) -> str:
    """Normalise ``value`` to ``YYYY-MM-DD``.

    Raises:
        ValueError: If ``value`` is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(str(value).strip()).isoformat()


def budgets_to_dict(budgets: Optional[CategoryBudgets]) -> Dict[str, float]:
    return {Category.parse(k).value: v for k, v in (budgets or {}).items()}


def budgets_from_dict(raw: Any) -> CategoryBudgets:
    if not isinstance(raw, dict):
        return {}
    budgets: CategoryBudgets = {}
    for key, value in raw.items():
        try:
            amount = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(amount):
            budgets[Category.parse(key)] = amount
    return budgets


def _number(value: Any, default: Optional[float] = 0) -> Optional[float]:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _list(value: Any) -> List[Any]:
    """Dict entries of a JSON array; anything else is treated as empty."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass
class Expense:
    """One recorded transaction."""

    id: str
    item: str
    amount: float
    category: Category
    date: str  # YYYY-MM-DD

    @property
    def month(self) -> str:
        return month_key(self.date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'item': self.item,
            'amount': self.amount,
            'category': self.category.value,
            'date': self.date,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'Expense':
        return cls(
            id=str(raw.get('id', '')),
            item=str(raw.get('item', '')),
            amount=_number(raw.get('amount')),
            category=Category.parse(raw.get('category')),
            date=str(raw.get('date', '')),
        )


@dataclass
class PocketMoneyInfo:
    """Recurring income baseline."""

    amount: Optional[float] = None
    payday: int = 1
    source: str = 'Monthly Income'

    def to_dict(self) -> Dict[str, Any]:
        return {'amount': self.amount, 'payday': self.payday, 'source': self.source}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'PocketMoneyInfo':
        amount = raw.get('amount')
        payday = int(_number(raw.get('payday'), 1))
        source = raw.get('source')
        return cls(
            amount=None if amount is None else _number(amount, None),
            payday=min(max(payday, 1), 31),
            source=source if source in INCOME_SOURCES else 'Monthly Income',
        )


@dataclass
class ArchivedMonth:
    """Frozen snapshot of a completed month."""

    month: str  # YYYY-MM
    pocket_money: float
    expenses: List[Expense] = field(default_factory=list)
    category_budgets: Optional[CategoryBudgets] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'month': self.month,
            'pocketMoney': self.pocket_money,
            'expenses': [e.to_dict() for e in self.expenses],
        }
        if self.category_budgets is not None:
            payload['categoryBudgets'] = budgets_to_dict(self.category_budgets)
        return payload

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'ArchivedMonth':
        budgets = raw.get('categoryBudgets')
        return cls(
            month=str(raw.get('month', '')),
            pocket_money=_number(raw.get('pocketMoney')),
            expenses=[Expense.from_dict(e) for e in _list(raw.get('expenses'))],
            category_budgets=None if budgets is None else budgets_from_dict(budgets),
        )


@dataclass
class QuickExpenseItem:
    """Preset for one-tap expense entry."""

    id: int
    name: str
    amount: float
    category: Category

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'amount': self.amount, 'category': self.category.value}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'QuickExpenseItem':
        return cls(
            id=int(_number(raw.get('id'))),
            name=str(raw.get('name', '')),
            amount=_number(raw.get('amount')),
            category=Category.parse(raw.get('category')),
        )


@dataclass
class BudgetStreak:
    """Consecutive days spent within the month's income."""

    count: int = 0
    last_checked_date: Optional[str] = None  # YYYY-MM-DD

    def to_dict(self) -> Dict[str, Any]:
        return {'count': self.count, 'lastCheckedDate': self.last_checked_date}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'BudgetStreak':
        last = raw.get('lastCheckedDate')
        return cls(
            count=max(int(_number(raw.get('count'))), 0),
            last_checked_date=None if last is None else str(last),
        )


@dataclass
class SavingsGoal:
    """The single active savings goal."""

    name: str
    amount: float
    saved_amount: float = 0
    completed: bool = False

    @property
    def reached(self) -> bool:
        return self.saved_amount >= self.amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'amount': self.amount,
            'savedAmount': self.saved_amount,
            'completed': self.completed,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'SavingsGoal':
        return cls(
            name=str(raw.get('name', '')),
            amount=_number(raw.get('amount')),
            saved_amount=_number(raw.get('savedAmount')),
            completed=bool(raw.get('completed', False)),
        )


@dataclass
class AppData:
    """Aggregate root persisted as one record."""

    pocket_money_info: PocketMoneyInfo = field(default_factory=PocketMoneyInfo)
    all_expenses: Dict[str, List[Expense]] = field(default_factory=dict)
    archived_months: List[ArchivedMonth] = field(default_factory=list)
    theme: str = 'system'
    last_seen_month: Optional[str] = None
    category_budgets: CategoryBudgets = field(default_factory=dict)
    passcode: Optional[str] = None
    onboarding_complete: bool = False
    quick_expenses: List[QuickExpenseItem] = field(default_factory=list)
    quick_expense_button_count: int = 3
    budget_streak: BudgetStreak = field(default_factory=BudgetStreak)
    savings_goal: Optional[SavingsGoal] = None
    has_shown_savings_education: bool = False
    last_summary_date: Optional[str] = None  # YYYY-MM-DD the weekly summary was last shown
    auto_category_map: Dict[str, Category] = field(default_factory=dict)

    def expenses_for_month(self, month: str) -> List[Expense]:
        return self.all_expenses.get(month, [])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pocketMoneyInfo': self.pocket_money_info.to_dict(),
            'allExpenses': {
                month: [e.to_dict() for e in expenses]
                for month, expenses in self.all_expenses.items()
            },
            'archivedMonths': [a.to_dict() for a in self.archived_months],
            'theme': self.theme,
            'lastSeenMonth': self.last_seen_month,
            'categoryBudgets': budgets_to_dict(self.category_budgets),
            'passcode': self.passcode,
            'onboardingComplete': self.onboarding_complete,
            'quickExpenses': [q.to_dict() for q in self.quick_expenses],
            'quickExpenseButtonCount': self.quick_expense_button_count,
            'budgetStreak': self.budget_streak.to_dict(),
            'savingsGoal': self.savings_goal.to_dict() if self.savings_goal else None,
            'hasShownSavingsEducation': self.has_shown_savings_education,
            'lastSummaryDate': self.last_summary_date,
            'autoCategoryMap': {k: v.value for k, v in self.auto_category_map.items()},
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'AppData':
        expenses_raw = raw.get('allExpenses')
        all_expenses: Dict[str, List[Expense]] = {}
        if isinstance(expenses_raw, dict):
            for month, entries in expenses_raw.items():
                for entry in _list(entries):
                    expense = Expense.from_dict(entry)
                    all_expenses.setdefault(_partition(expense, str(month)), []).append(expense)

        goal_raw = raw.get('savingsGoal')
        theme = raw.get('theme')
        keyword_map = raw.get('autoCategoryMap')
        return cls(
            pocket_money_info=PocketMoneyInfo.from_dict(_mapping(raw.get('pocketMoneyInfo'))),
            all_expenses=all_expenses,
            archived_months=[ArchivedMonth.from_dict(a) for a in _list(raw.get('archivedMonths'))],
            theme=theme if theme in THEMES else 'system',
            last_seen_month=_optional_str(raw.get('lastSeenMonth')),
            category_budgets=budgets_from_dict(raw.get('categoryBudgets')),
            passcode=_optional_str(raw.get('passcode')),
            onboarding_complete=bool(raw.get('onboardingComplete', False)),
            quick_expenses=[QuickExpenseItem.from_dict(q) for q in _list(raw.get('quickExpenses'))],
            quick_expense_button_count=int(_number(raw.get('quickExpenseButtonCount'), 3)),
            budget_streak=BudgetStreak.from_dict(_mapping(raw.get('budgetStreak'))),
            savings_goal=SavingsGoal.from_dict(goal_raw) if isinstance(goal_raw, dict) else None,
            has_shown_savings_education=bool(raw.get('hasShownSavingsEducation', False)),
            last_summary_date=_optional_str(raw.get('lastSummaryDate')),
            auto_category_map={
                str(k).lower(): Category.parse(v) for k, v in _mapping(keyword_map).items()
            },
        )


def _partition(expense: Expense, stored_under: str) -> str:
    """Month an expense belongs in; undated records stay where they were found."""
    try:
        return month_key(iso_date(expense.date))
    except ValueError:
        return stored_under
