"""Application controller tying the store to the feature modules.

``BudgetBuddy`` is what a front end talks to: it runs the start-of-session
checks (month rollover, daily streak) and offers the user-level actions on
top of the lower-level modules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from . import analytics, budgets, rollover, savings
from .category_rules import KeywordCategorizer
from .ledger import ExpenseLedger
from .models import AppData, BudgetStreak, Category, DateLike, Expense, month_key
from .preferences import find_quick_expense, verify_passcode
from .storage import AppDataStore

logger = logging.getLogger(__name__)


@dataclass
class StartupReport:
    rollover: rollover.RolloverResult
    streak: BudgetStreak


class BudgetBuddy:
    """Facade over one ``AppDataStore``."""

    def __init__(self, store: Optional[AppDataStore] = None, clock: Optional[Callable[[], date]] = None):
        """Initialize the controller.

        Args:
            store: Backing store. Defaults to the configured data file.
            clock: Returns today's date; injectable for tests.
        """
        self.store = store or AppDataStore()
        self.clock = clock or date.today
        self.ledger = ExpenseLedger(self.store)
        self._startup: Optional[StartupReport] = None

    def today(self) -> date:
        return self.clock()

    @property
    def current_month(self) -> str:
        return month_key(self.today())

    def start(self) -> StartupReport:
        """Run the month rollover and the daily streak check once per session."""
        if self._startup is None:
            today = self.today()
            result = rollover.run_rollover(self.store, today)
            streak = budgets.update_streak(self.store, today)
            self._startup = StartupReport(rollover=result, streak=streak)
        return self._startup

    def snapshot(self) -> AppData:
        return self.store.load()

    def current_month_expenses(self) -> List[Expense]:
        return self.ledger.get_expenses_for_month(self.current_month)

    def categorizer(self) -> KeywordCategorizer:
        return KeywordCategorizer(self.snapshot().auto_category_map)

    def suggest_category(self, text: str) -> Optional[Category]:
        return self.categorizer().suggest(text)

    def next_screen(self, authenticated: bool = False) -> str:
        """Which screen a freshly opened app should show."""
        data = self.snapshot()
        if data.passcode and not authenticated:
            return 'passcode'
        if not data.onboarding_complete:
            return 'onboarding'
        if data.pocket_money_info.amount is None:
            return 'setup'
        return 'dashboard'

    def unlock(self, attempt: str) -> bool:
        return verify_passcode(self.snapshot(), attempt)

    def take_weekly_summary(self) -> Optional[Dict[str, Any]]:
        """The weekly summary to show now, or ``None``.

        A summary is due on Mondays once income is set, and is handed out
        only once that day.
        """
        today = self.today()
        data = self.snapshot()
        income = data.pocket_money_info.amount
        if today.weekday() != 0 or income is None or data.last_summary_date == today.isoformat():
            return None
        data.last_summary_date = today.isoformat()
        self.store.save(data)
        return analytics.weekly_summary(data.expenses_for_month(month_key(today)), income, today)

    # Expenses ---------------------------------------------------------------

    def add_expense(
        self,
        item: str,
        amount: float,
        category: Optional[Category] = None,
        date: Optional[DateLike] = None,
    ) -> Expense:
        """Record an expense; the category is guessed from the item if omitted."""
        if category is None:
            category = self.categorizer().classify(item or '')
        return self.ledger.add_expense(item, amount, category, date or self.today())

    def add_quick_expense(self, preset_id: int) -> Expense:
        """Record today's expense from a quick-expense preset.

        Raises:
            KeyError: If no preset has ``preset_id``.
        """
        preset = find_quick_expense(self.snapshot(), preset_id)
        if preset is None:
            raise KeyError(f"No quick expense with id {preset_id}")
        return self.ledger.add_expense(preset.name, preset.amount, preset.category, self.today())

    def add_parsed_expense(self, item: str, amount: float) -> Expense:
        """Record an ``{item, amount}`` pair from voice input, auto-categorized."""
        return self.add_expense(item, amount)

    # Savings ----------------------------------------------------------------

    def set_goal(self, name: str, amount: float):
        return savings.set_goal(self.store, name, amount)

    def add_to_savings(self, amount: float) -> savings.SavingsContribution:
        return savings.add_to_savings(self.store, amount, self.today())

    def available_balance(self) -> float:
        return savings.available_balance(self.snapshot(), self.today())
