from __future__ import annotations

from datetime import date

import pytest

from budget_buddy import analytics
from budget_buddy.models import Category, Expense
from budget_buddy.tips import FINANCIAL_TIPS, daily_tip

TODAY = date(2024, 6, 10)


def _expense(id_, item, amount, category, day):
    return Expense(id=id_, item=item, amount=amount, category=category, date=day)


@pytest.fixture
def june():
    return [
        _expense('1', 'Lunch', 200, Category.FOOD, '2024-06-02'),
        _expense('2', 'Samosa', 100, Category.FOOD, '2024-06-05'),
        _expense('3', 'Metro card', 100, Category.TRANSPORT, '2024-06-05'),
    ]


def test_expenses_frame_columns(june) -> None:
    df = analytics.expenses_frame(june)
    assert list(df.columns) == analytics.FRAME_COLUMNS
    assert df['amount'].sum() == 400
    assert str(df['date'].dtype).startswith('datetime64')


def test_expenses_frame_empty() -> None:
    df = analytics.expenses_frame([])
    assert df.empty
    assert list(df.columns) == analytics.FRAME_COLUMNS


def test_month_summary_separates_savings() -> None:
    expenses = [
        _expense('1', 'Chai', 100, Category.FOOD, '2024-06-01'),
        _expense('2', 'Saved for Cycle', 50, Category.SAVINGS, '2024-06-02'),
    ]
    summary = analytics.month_summary(500, expenses)
    assert summary['total_outgoing'] == 150
    assert summary['total_saved'] == 50
    assert summary['spent_on_goods'] == 100
    assert summary['remaining'] == 350
    assert summary['expense_count'] == 2


def test_month_summary_without_income() -> None:
    summary = analytics.month_summary(None, [])
    assert summary['income'] == 0
    assert summary['remaining'] == 0


def test_category_breakdown(june) -> None:
    breakdown = analytics.category_breakdown(june)
    assert list(breakdown['Category']) == ['Food', 'Transport']
    assert list(breakdown['Total']) == [300, 100]
    assert list(breakdown['Share']) == [75, 25]
    assert analytics.top_category(june) == (Category.FOOD, 300)
    assert analytics.top_category([]) is None


def test_daily_breakdown(june) -> None:
    daily = analytics.daily_breakdown(june)
    assert list(daily['Date']) == [date(2024, 6, 5), date(2024, 6, 2)]
    assert list(daily['Total']) == [200, 200]
    assert list(daily['Count']) == [2, 1]


def test_project_balance_end() -> None:
    spent = [_expense('1', 'Lunch', 200, Category.FOOD, '2024-06-01')]
    assert analytics.project_balance_end(300, spent, TODAY) == date(2024, 6, 25)
    assert analytics.project_balance_end(0, spent, TODAY) == TODAY
    assert analytics.project_balance_end(10000, spent, TODAY) is None
    assert analytics.project_balance_end(300, [], TODAY) is None


def test_insights_warns_on_dominant_category() -> None:
    expenses = [
        _expense('1', 'Pizza', 300, Category.FOOD, '2024-06-03'),
        _expense('2', 'Cab', 100, Category.TRANSPORT, '2024-06-04'),
    ]
    result = analytics.insights(1000, expenses, TODAY)
    assert result['top_category'] is Category.FOOD
    assert result['top_category_amount'] == 300
    assert result['daily_average'] == 40
    assert result['money_lasts_until'] == date(2024, 6, 25)
    assert result['is_warning'] is True
    assert result['suggestion'].startswith('You spent 75% on Food!')


def test_insights_balanced_spending() -> None:
    expenses = [
        _expense('1', 'Pizza', 100, Category.FOOD, '2024-06-03'),
        _expense('2', 'Cab', 100, Category.TRANSPORT, '2024-06-04'),
    ]
    result = analytics.insights(1000, expenses, TODAY)
    assert result['is_warning'] is False
    assert result['suggestion'] == "Great job! You're spending wisely."


def test_insights_without_income_has_no_projection() -> None:
    result = analytics.insights(None, [_expense('1', 'Pizza', 100, Category.FOOD, '2024-06-03')], TODAY)
    assert result['money_lasts_until'] is None


def test_weekly_summary() -> None:
    expenses = [
        _expense('1', 'Dinner', 100, Category.FOOD, '2024-06-02'),
        _expense('2', 'Juice', 30, Category.FOOD, '2024-06-05'),
        _expense('3', 'Bus', 20, Category.TRANSPORT, '2024-06-09'),
    ]
    summary = analytics.weekly_summary(expenses, 400, TODAY)
    assert summary == {'spent': 50, 'saved': 50, 'top_category': Category.FOOD}


def test_weekly_summary_overspend_goes_negative() -> None:
    summary = analytics.weekly_summary([_expense('1', 'Shoes', 900, Category.OTHER, '2024-06-09')], 400, TODAY)
    assert summary['saved'] == -800
    assert analytics.weekly_summary([], None, TODAY)['top_category'] is None


def test_search_and_sort(june) -> None:
    by_category = analytics.search_expenses(june, 'FOOD', 'amount-asc')
    assert [e.id for e in by_category] == ['2', '1']
    assert [e.id for e in analytics.search_expenses(june, 'metro')] == ['3']
    assert [e.id for e in analytics.search_expenses(june, '', 'date-asc')][0] == '1'
    with pytest.raises(ValueError):
        analytics.search_expenses(june, '', 'name-asc')


@pytest.mark.parametrize('payday, today, expected', [
    (5, date(2024, 6, 10), (25, date(2024, 7, 5))),
    (15, date(2024, 6, 10), (5, date(2024, 6, 15))),
    (10, date(2024, 6, 10), (30, date(2024, 7, 10))),
    (31, date(2024, 2, 10), (19, date(2024, 2, 29))),
    (1, date(2024, 12, 20), (12, date(2025, 1, 1))),
])
def test_payday_countdown(payday, today, expected) -> None:
    assert analytics.payday_countdown(payday, today) == expected


def test_daily_tip_rotates_by_day_of_year() -> None:
    assert daily_tip(date(2024, 1, 1)) == FINANCIAL_TIPS[1]
    assert daily_tip(date(2024, 1, 1)) == daily_tip(date(2025, 1, 1))
    assert daily_tip(date(2024, 1, 2)) != daily_tip(date(2024, 1, 1))
