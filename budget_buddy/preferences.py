"""Setters for income, theme, passcode, quick expenses and keyword rules.

Each function is a read-modify-write of the stored record and validates its
input before anything is saved.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .defaults import DEFAULT_KEYWORDS
from .models import (
    INCOME_SOURCES,
    THEMES,
    AppData,
    Category,
    PocketMoneyInfo,
    QuickExpenseItem,
)
from .storage import AppDataStore

PASSCODE_PATTERN = re.compile(r'^\d{4}$')
MIN_QUICK_BUTTONS = 3
MAX_QUICK_BUTTONS = 6


class PasscodeError(ValueError):
    """Raised when a passcode cannot be set."""


def save_pocket_money_info(
    store: AppDataStore,
    amount: float,
    payday: int = 1,
    source: str = 'Monthly Income',
) -> PocketMoneyInfo:
    """Set the recurring income.

    Raises:
        ValueError: If the amount is not positive, the payday is outside
            1-31 or the source is unknown.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount <= 0:
        raise ValueError(f"Income amount must be a positive number, got {amount!r}")
    if not isinstance(payday, int) or not 1 <= payday <= 31:
        raise ValueError(f"Payday must be a day of the month (1-31), got {payday!r}")
    if source not in INCOME_SOURCES:
        raise ValueError(f"Unknown income source {source!r}")
    info = PocketMoneyInfo(amount=amount, payday=payday, source=source)
    data = store.load()
    data.pocket_money_info = info
    store.save(data)
    return info


def save_theme(store: AppDataStore, theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Theme must be one of {', '.join(THEMES)}")
    store.update(lambda data: setattr(data, 'theme', theme))


def complete_onboarding(store: AppDataStore) -> None:
    store.update(lambda data: setattr(data, 'onboarding_complete', True))


def mark_savings_education_shown(store: AppDataStore) -> None:
    store.update(lambda data: setattr(data, 'has_shown_savings_education', True))


# Passcode ---------------------------------------------------------------------


def set_passcode(store: AppDataStore, passcode: str, confirmation: str) -> None:
    """Set the 4-digit app lock.

    Raises:
        PasscodeError: If the code is not 4 digits or the confirmation
            differs.
    """
    if not PASSCODE_PATTERN.match(passcode or ''):
        raise PasscodeError("Passcode must be 4 digits")
    if passcode != confirmation:
        raise PasscodeError("Passcodes do not match. Try again.")
    store.update(lambda data: setattr(data, 'passcode', passcode))


def clear_passcode(store: AppDataStore) -> None:
    store.update(lambda data: setattr(data, 'passcode', None))


def verify_passcode(data: AppData, attempt: str) -> bool:
    """True when no passcode is set or ``attempt`` matches it."""
    return data.passcode is None or attempt == data.passcode


# Quick expenses ---------------------------------------------------------------


def save_quick_expenses(store: AppDataStore, items: Iterable[QuickExpenseItem]) -> List[QuickExpenseItem]:
    """Replace the quick-expense presets.

    Raises:
        ValueError: If a preset has a blank name, a non-positive amount or
            a duplicate id.
    """
    presets = list(items)
    seen = set()
    for preset in presets:
        if not preset.name or not preset.name.strip():
            raise ValueError("Quick expense name cannot be empty")
        if preset.amount <= 0:
            raise ValueError(f"Quick expense {preset.name!r} must have a positive amount")
        if preset.id in seen:
            raise ValueError(f"Duplicate quick expense id {preset.id}")
        seen.add(preset.id)
    store.update(lambda data: setattr(data, 'quick_expenses', presets))
    return presets


def save_quick_expense_button_count(store: AppDataStore, count: int) -> None:
    if not isinstance(count, int) or not MIN_QUICK_BUTTONS <= count <= MAX_QUICK_BUTTONS:
        raise ValueError(f"Button count must be between {MIN_QUICK_BUTTONS} and {MAX_QUICK_BUTTONS}")
    store.update(lambda data: setattr(data, 'quick_expense_button_count', count))


def visible_quick_expenses(data: AppData) -> List[QuickExpenseItem]:
    """The presets shown as buttons on the dashboard."""
    return data.quick_expenses[:data.quick_expense_button_count]


def find_quick_expense(data: AppData, preset_id: int) -> Optional[QuickExpenseItem]:
    return next((q for q in data.quick_expenses if q.id == preset_id), None)


# Keyword table ----------------------------------------------------------------


def add_category_keyword(store: AppDataStore, keyword: str, category: Category) -> None:
    """Add or overwrite one entry of the auto-categorization table."""
    cleaned = (keyword or '').strip().lower()
    if not cleaned:
        raise ValueError("Keyword cannot be empty")
    store.update(lambda data: data.auto_category_map.__setitem__(cleaned, Category.parse(category)))


def remove_category_keyword(store: AppDataStore, keyword: str) -> bool:
    """Remove a user keyword; returns False if it was not in the table.

    Raises:
        ValueError: If ``keyword`` is built in. Built-in keywords are merged
            back on every load, so they can be reassigned but not removed.
    """
    cleaned = (keyword or '').strip().lower()
    if cleaned in DEFAULT_KEYWORDS:
        raise ValueError(f"{cleaned!r} is a built-in keyword; assign it another category instead")
    data = store.load()
    if data.auto_category_map.pop(cleaned, None) is None:
        return False
    store.save(data)
    return True
