"""Derived views over expenses: summaries, insights, search and projections.

Nothing here touches the store; callers pass in the expenses and income they
want analysed.
"""

from __future__ import annotations

import calendar
import math
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .models import Category, Expense

FRAME_COLUMNS = ['id', 'item', 'amount', 'category', 'date']
SORT_OPTIONS = ('date-desc', 'date-asc', 'amount-desc', 'amount-asc')
DASHBOARD_HORIZON_DAYS = 60
INSIGHTS_HORIZON_DAYS = 90
DOMINANT_CATEGORY_SHARE = 0.5


def expenses_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Expenses as a DataFrame with a datetime ``date`` column."""
    rows = [
        {'id': e.id, 'item': e.item, 'amount': e.amount, 'category': e.category.value, 'date': e.date}
        for e in expenses
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df['amount'] = pd.to_numeric(df['amount'], errors='coerce').fillna(0.0)
    df['date'] = pd.to_datetime(df['date'], errors='coerce')
    return df


def month_summary(pocket_money: Optional[float], expenses: Iterable[Expense]) -> Dict[str, float]:
    """Balance figures for one month.

    Savings contributions count as outgoing money but are reported
    separately from spending on goods.
    """
    df = expenses_frame(expenses)
    total_outgoing = float(df['amount'].sum())
    total_saved = float(df.loc[df['category'] == Category.SAVINGS.value, 'amount'].sum())
    income = pocket_money or 0
    return {
        'income': income,
        'total_outgoing': total_outgoing,
        'total_saved': total_saved,
        'spent_on_goods': total_outgoing - total_saved,
        'remaining': income - total_outgoing,
        'expense_count': len(df),
    }


def category_breakdown(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Total and share of spend per category, largest first."""
    df = expenses_frame(expenses)
    if df.empty:
        return pd.DataFrame(columns=['Category', 'Total', 'Share'])
    totals = df.groupby('category')['amount'].sum()
    totals = totals[totals > 0].sort_values(ascending=False)
    grand_total = totals.sum()
    return pd.DataFrame({
        'Category': totals.index,
        'Total': totals.values,
        'Share': (totals / grand_total * 100).values if grand_total else 0.0,
    }).reset_index(drop=True)


def daily_breakdown(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Per-day totals and counts, most recent day first."""
    df = expenses_frame(expenses).dropna(subset=['date'])
    if df.empty:
        return pd.DataFrame(columns=['Date', 'Total', 'Count'])
    grouped = df.groupby(df['date'].dt.date)['amount'].agg(['sum', 'count'])
    grouped = grouped.sort_index(ascending=False)
    return pd.DataFrame({
        'Date': grouped.index,
        'Total': grouped['sum'].values,
        'Count': grouped['count'].values,
    })


def top_category(expenses: Iterable[Expense]) -> Optional[Tuple[Category, float]]:
    breakdown = category_breakdown(expenses)
    if breakdown.empty:
        return None
    first = breakdown.iloc[0]
    return Category.parse(first['Category']), float(first['Total'])


def project_balance_end(
    remaining: float,
    expenses: Iterable[Expense],
    today: Optional[date] = None,
    horizon_days: int = DASHBOARD_HORIZON_DAYS,
) -> Optional[date]:
    """Date the money runs out at the month's average daily spend.

    Returns ``None`` when the money lasts beyond ``horizon_days`` or nothing
    has been spent yet.
    """
    today = today or date.today()
    total_spent = float(expenses_frame(expenses)['amount'].sum())
    average = total_spent / today.day
    if average <= 0:
        return None
    if remaining <= 0:
        return today
    days_left = math.floor(remaining / average)
    if days_left > horizon_days:
        return None
    return today + timedelta(days=days_left)


def insights(
    pocket_money: Optional[float],
    expenses: Iterable[Expense],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Headline numbers for the insights view."""
    today = today or date.today()
    expenses = list(expenses)
    summary = month_summary(pocket_money, expenses)
    total_spent = summary['total_outgoing']
    top = top_category(expenses)

    message = "Great job! You're spending wisely."
    is_warning = False
    if top and total_spent > 0 and top[1] / total_spent > DOMINANT_CATEGORY_SHARE:
        share = top[1] / total_spent * 100
        message = (
            f"You spent {share:.0f}% on {top[0].value}! "
            f"Try reducing by {top[1] * 0.1:.0f} to save more."
        )
        is_warning = True

    lasts_until = None
    if summary['remaining'] > 0:
        lasts_until = project_balance_end(summary['remaining'], expenses, today, INSIGHTS_HORIZON_DAYS)

    return {
        'top_category': top[0] if top else None,
        'top_category_amount': top[1] if top else 0.0,
        'daily_average': total_spent / today.day,
        'money_lasts_until': lasts_until,
        'suggestion': message,
        'is_warning': is_warning,
    }


def weekly_summary(
    expenses: Iterable[Expense],
    pocket_money: Optional[float],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Spend over the last seven days against a quarter of the income.

    ``saved`` goes negative when the week's spend exceeds that quarter.
    """
    today = today or date.today()
    df = expenses_frame(expenses)
    week = df[df['date'] >= pd.Timestamp(today - timedelta(days=7))]
    spent = float(week['amount'].sum())
    top = None
    if not week.empty:
        by_category = week.groupby('category')['amount'].sum().sort_values(ascending=False)
        top = Category.parse(by_category.index[0])
    return {
        'spent': spent,
        'saved': (pocket_money or 0) / 4 - spent,
        'top_category': top,
    }


def search_expenses(expenses: Iterable[Expense], term: str = '', sort_by: str = 'date-desc') -> List[Expense]:
    """Filter by item or category text and sort.

    Args:
        expenses: Expenses to search.
        term: Case-insensitive text matched against item and category.
        sort_by: One of ``date-desc``, ``date-asc``, ``amount-desc``,
            ``amount-asc``.
    """
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"sort_by must be one of {', '.join(SORT_OPTIONS)}")
    results = list(expenses)
    needle = (term or '').strip().lower()
    if needle:
        results = [
            e for e in results
            if needle in e.item.lower() or needle in e.category.value.lower()
        ]
    key, _, direction = sort_by.partition('-')
    if key == 'date':
        return sorted(results, key=lambda e: e.date, reverse=direction == 'desc')
    return sorted(results, key=lambda e: e.amount, reverse=direction == 'desc')


def _clamped_day(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))


def payday_countdown(payday: int, today: Optional[date] = None) -> Tuple[int, date]:
    """Days until the next payday and its date.

    A payday past the end of a short month falls on that month's last day.
    On payday itself the countdown targets next month's payday.
    """
    today = today or date.today()
    this_month = _clamped_day(today.year, today.month, payday)
    if today < this_month:
        return (this_month - today).days, this_month
    year, month = (today.year + 1, 1) if today.month == 12 else (today.year, today.month + 1)
    upcoming = _clamped_day(year, month, payday)
    return (upcoming - today).days, upcoming
