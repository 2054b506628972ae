from __future__ import annotations

from datetime import date

import pandas as pd

from budget_buddy.budgets import (
    OverBudgetMonitor,
    active_limits,
    budget_status,
    evaluate_streak,
    save_category_budgets,
    streak_message,
    update_streak,
)
from budget_buddy.models import BudgetStreak, Category, Expense

TODAY = date(2024, 6, 10)


def _expense(amount, category, day='2024-06-05', id_='x'):
    return Expense(id=id_, item='thing', amount=amount, category=category, date=day)


def test_save_category_budgets_replaces_map(store) -> None:
    save_category_budgets(store, {'Fun': 150, Category.TRANSPORT: '80'})
    assert store.load().category_budgets == {Category.FUN: 150.0, Category.TRANSPORT: 80.0}


def test_active_limits_skip_non_positive() -> None:
    limits = active_limits({Category.FOOD: 400, Category.FUN: 0, Category.OTHER: -3})
    assert limits == {Category.FOOD: 400}


def test_budget_status_flags_over_and_near_limit() -> None:
    expenses = [
        _expense(300, Category.FOOD),
        _expense(150, Category.FOOD),
        _expense(85, Category.RECHARGE),
        _expense(999, Category.OTHER),
    ]
    budgets = {Category.FOOD: 400, Category.RECHARGE: 100, Category.ENTERTAINMENT: 200, Category.FUN: 0}

    status = budget_status(expenses, budgets).set_index('Category')

    assert list(status.index) == [Category.FOOD, Category.RECHARGE, Category.ENTERTAINMENT]
    assert bool(status.loc[Category.FOOD, 'Is Over']) is True
    assert status.loc[Category.FOOD, 'Remaining'] == -50
    assert bool(status.loc[Category.RECHARGE, 'Near Limit']) is True
    assert bool(status.loc[Category.ENTERTAINMENT, 'Is Over']) is False
    assert status.loc[Category.ENTERTAINMENT, 'Spent'] == 0


def test_budget_status_without_limits_is_empty() -> None:
    assert budget_status([_expense(10, Category.FOOD)], {}).empty


def test_over_budget_monitor_is_edge_triggered() -> None:
    budgets = {Category.FOOD: 100, Category.FUN: 50}
    monitor = OverBudgetMonitor()

    assert monitor.check(budget_status([_expense(50, Category.FOOD)], budgets)) == []
    over = [_expense(150, Category.FOOD)]
    assert monitor.check(budget_status(over, budgets)) == [Category.FOOD]
    assert monitor.check(budget_status(over, budgets)) == []

    both = over + [_expense(60, Category.FUN)]
    assert monitor.check(budget_status(both, budgets)) == [Category.FUN]

    assert monitor.check(budget_status([_expense(60, Category.FUN)], budgets)) == []
    assert monitor.check(budget_status(both, budgets)) == [Category.FOOD]
    assert monitor.over == {Category.FOOD, Category.FUN}


def test_over_budget_monitor_handles_empty_status() -> None:
    monitor = OverBudgetMonitor()
    assert monitor.check(pd.DataFrame(columns=['Category', 'Is Over'])) == []


def test_streak_increments_after_yesterday() -> None:
    streak = BudgetStreak(count=4, last_checked_date='2024-06-09')
    assert evaluate_streak(streak, 100, 500, TODAY) == BudgetStreak(5, '2024-06-10')


def test_streak_resets_to_one_after_gap() -> None:
    streak = BudgetStreak(count=4, last_checked_date='2024-06-07')
    assert evaluate_streak(streak, 100, 500, TODAY) == BudgetStreak(1, '2024-06-10')


def test_streak_resets_to_zero_when_over() -> None:
    streak = BudgetStreak(count=4, last_checked_date='2024-06-09')
    assert evaluate_streak(streak, 501, 500, TODAY) == BudgetStreak(0, '2024-06-10')


def test_streak_spending_equal_to_income_counts() -> None:
    assert evaluate_streak(BudgetStreak(), 500, 500, TODAY).count == 1


def test_streak_unset_income_counts_as_zero() -> None:
    assert evaluate_streak(BudgetStreak(), 0, None, TODAY).count == 1
    assert evaluate_streak(BudgetStreak(), 10, None, TODAY).count == 0


def test_streak_not_checked_twice_a_day() -> None:
    streak = BudgetStreak(count=2, last_checked_date='2024-06-10')
    assert evaluate_streak(streak, 9999, 1, TODAY) is streak


def test_update_streak_persists_once_per_day(store, ledger, set_income) -> None:
    set_income(500)
    data = store.load()
    data.budget_streak = BudgetStreak(count=2, last_checked_date='2024-06-09')
    store.save(data)
    ledger.add_expense('Chai', 20, Category.FOOD, '2024-06-10')
    ledger.add_expense('Old', 9999, Category.OTHER, '2024-05-10')

    assert update_streak(store, TODAY).count == 3
    assert store.load().budget_streak == BudgetStreak(3, '2024-06-10')

    ledger.add_expense('Phone', 1000, Category.OTHER, '2024-06-10')
    assert update_streak(store, TODAY).count == 3


def test_streak_messages() -> None:
    assert 'champion' in streak_message(7)
    assert 'habit' in streak_message(3)
    assert 'right track' in streak_message(1)
    assert 'Start a new streak' in streak_message(0)


def test_over_budget_monitor_reset_rearms_alerts() -> None:
    monitor = OverBudgetMonitor()
    status = budget_status([_expense(150, Category.FOOD)], {Category.FOOD: 100})
    assert monitor.check(status) == [Category.FOOD]
    monitor.reset()
    assert monitor.over == set()
    assert monitor.check(status) == [Category.FOOD]
