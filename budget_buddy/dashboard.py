"""Streamlit front end for Budget Buddy.

Run with ``streamlit run budget_buddy/dashboard.py`` (or ``run_dashboard.py``).
This module only renders data and forwards user actions; all state changes
go through ``BudgetBuddy``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import streamlit as st

# Add project root to path when executed directly by streamlit
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from budget_buddy import analytics, config
from budget_buddy.app import BudgetBuddy
from budget_buddy.budgets import OverBudgetMonitor, budget_status, streak_message
from budget_buddy.models import INCOME_SOURCES, Category
from budget_buddy.preferences import complete_onboarding, save_pocket_money_info, visible_quick_expenses
from budget_buddy.savings import InsufficientBalanceError, goal_progress
from budget_buddy.tips import daily_tip

logger = logging.getLogger(__name__)


def _get_app() -> BudgetBuddy:
    """One controller per browser session, started once."""
    if 'budget_buddy' not in st.session_state:
        app = BudgetBuddy()
        app.start()
        st.session_state['budget_buddy'] = app
    return st.session_state['budget_buddy']


def _ensure_alert_state() -> OverBudgetMonitor:
    if 'over_budget_monitor' not in st.session_state:
        st.session_state['over_budget_monitor'] = OverBudgetMonitor()
    return st.session_state['over_budget_monitor']


def _new_over_budget_alerts(app: BudgetBuddy) -> List[Category]:
    """Categories that went over budget since the last render."""
    data = app.snapshot()
    status = budget_status(app.current_month_expenses(), data.category_budgets)
    return _ensure_alert_state().check(status)


def _rerun() -> None:
    rerun = getattr(st, 'rerun', None) or getattr(st, 'experimental_rerun')
    rerun()


def _render_balance(app: BudgetBuddy) -> None:
    data = app.snapshot()
    expenses = app.current_month_expenses()
    summary = analytics.month_summary(data.pocket_money_info.amount, expenses)
    col1, col2, col3 = st.columns(3)
    col1.metric("Remaining", f"{summary['remaining']:,.0f}")
    col2.metric("Spent", f"{summary['spent_on_goods']:,.0f}")
    col3.metric("Saved", f"{summary['total_saved']:,.0f}")

    end = analytics.project_balance_end(summary['remaining'], expenses, app.today())
    if end is None:
        st.caption("At this rate, your money will last for the whole month!")
    else:
        st.caption(f"At this rate, your money will last until {end:%d %b}")

    days_left, next_payday = analytics.payday_countdown(data.pocket_money_info.payday, app.today())
    st.caption(f"{days_left} days until {data.pocket_money_info.source} ({next_payday:%d %b})")
    st.caption(f"🔥 {data.budget_streak.count}-day streak. {streak_message(data.budget_streak.count)}")


def _render_add_expense(app: BudgetBuddy) -> None:
    with st.form('add_expense', clear_on_submit=True):
        item = st.text_input("Item")
        amount = st.number_input("Amount", min_value=0.0, step=1.0)
        suggested = app.suggest_category(item) or Category.OTHER
        categories = list(Category)
        category = st.selectbox("Category", categories, index=categories.index(suggested),
                                format_func=lambda c: c.value)
        submitted = st.form_submit_button("Add expense")
    if submitted:
        try:
            app.add_expense(item, amount, category)
        except ValueError as exc:
            st.error(str(exc))
        else:
            _rerun()

    presets = visible_quick_expenses(app.snapshot())
    if presets:
        columns = st.columns(len(presets))
        for column, preset in zip(columns, presets):
            if column.button(f"{preset.name} {preset.amount:,.0f}", key=f"quick_{preset.id}"):
                app.add_quick_expense(preset.id)
                _rerun()


def _render_budgets(app: BudgetBuddy) -> None:
    for category in _new_over_budget_alerts(app):
        st.warning(f"🚨 You've gone over your {category.value} budget this month.")

    status = budget_status(app.current_month_expenses(), app.snapshot().category_budgets)
    if status.empty:
        st.info("Set category budgets to track your spending goals.")
        return
    st.subheader("Budget Progress")
    for _, row in status.iterrows():
        st.text(f"{row['Category'].value}: {row['Spent']:,.0f} / {row['Budget']:,.0f}")
        st.progress(min(row['Percentage'], 100) / 100)


def _render_savings(app: BudgetBuddy) -> None:
    goal = app.snapshot().savings_goal
    st.subheader("Savings Goal")
    if goal is None:
        with st.form('set_goal'):
            name = st.text_input("What are you saving for?")
            target = st.number_input("Target amount", min_value=0.0, step=50.0)
            if st.form_submit_button("Set goal"):
                try:
                    app.set_goal(name, target)
                except ValueError as exc:
                    st.error(str(exc))
                else:
                    _rerun()
        return

    st.text(f"{goal.name}: {goal.saved_amount:,.0f} / {goal.amount:,.0f}")
    st.progress(goal_progress(goal))
    celebrated = st.session_state.pop('goal_celebration', None)
    if celebrated:
        st.balloons()
        st.success(f"Goal achieved: {celebrated}!")
    amount = st.number_input("Add to savings", min_value=0.0, step=10.0, key='savings_amount')
    if st.button("Save it"):
        try:
            contribution = app.add_to_savings(amount)
        except InsufficientBalanceError as exc:
            st.error(f"⚠️ {exc}")
        except ValueError as exc:
            st.error(str(exc))
        else:
            if contribution.goal_completed:
                st.session_state['goal_celebration'] = goal.name
            _rerun()


def _pending_weekly_summary(app: BudgetBuddy) -> Optional[Dict[str, Any]]:
    """The weekly summary held for this session until dismissed."""
    if 'weekly_summary' not in st.session_state:
        st.session_state['weekly_summary'] = app.take_weekly_summary()
    return st.session_state['weekly_summary']


def _render_insights(app: BudgetBuddy) -> None:
    summary = _pending_weekly_summary(app)
    if summary is not None:
        top = summary['top_category'].value if summary['top_category'] else 'N/A'
        st.info(
            f"✨ Weekly Summary: spent {summary['spent']:,.0f}, "
            f"saved {summary['saved']:,.0f}, top category {top}"
        )
        if st.button("Got it", key='dismiss_weekly_summary'):
            st.session_state['weekly_summary'] = None
            _rerun()

    data = app.snapshot()
    expenses = app.current_month_expenses()
    if not expenses:
        return
    st.subheader("Insights")
    result = analytics.insights(data.pocket_money_info.amount, expenses, app.today())
    if result['is_warning']:
        st.warning(result['suggestion'])
    else:
        st.success(result['suggestion'])
    st.caption(f"Daily average: {result['daily_average']:,.0f}")
    st.dataframe(analytics.category_breakdown(expenses), use_container_width=True)


def _render_history(app: BudgetBuddy) -> None:
    term = st.text_input("Search expenses")
    sort_by = st.selectbox("Sort by", analytics.SORT_OPTIONS)
    results = analytics.search_expenses(app.ledger.get_all_expenses(), term, sort_by)
    frame = analytics.expenses_frame(results)
    st.dataframe(frame.drop(columns=['id']), use_container_width=True)


def _render_setup(app: BudgetBuddy) -> None:
    st.header("Welcome to Budget Buddy")
    with st.form('setup'):
        amount = st.number_input("How much money do you get each month?", min_value=0.0, step=100.0)
        payday = st.number_input("Payday (day of month)", min_value=1, max_value=31, value=1, step=1)
        source = st.selectbox("Source", INCOME_SOURCES)
        if st.form_submit_button("Start tracking"):
            try:
                save_pocket_money_info(app.store, amount, int(payday), source)
            except ValueError as exc:
                st.error(str(exc))
            else:
                complete_onboarding(app.store)
                _rerun()


def main() -> None:
    """Render the dashboard."""
    st.set_page_config(page_title="Budget Buddy", page_icon="💰")
    config.ensure_data_directories()
    app = _get_app()
    screen = app.next_screen(authenticated=st.session_state.get('authenticated', False))

    if screen == 'passcode':
        attempt = st.text_input("Enter Passcode", type='password', max_chars=4)
        if attempt and len(attempt) == 4:
            if app.unlock(attempt):
                st.session_state['authenticated'] = True
                _rerun()
            else:
                st.error("Incorrect Passcode")
        return
    if screen in ('onboarding', 'setup'):
        _render_setup(app)
        return

    st.title("💰 Budget Buddy")
    st.caption(daily_tip(app.today()))
    _render_balance(app)
    _render_add_expense(app)
    _render_budgets(app)
    _render_savings(app)
    _render_insights(app)
    _render_history(app)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
