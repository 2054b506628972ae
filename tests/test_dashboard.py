from __future__ import annotations

import types
from datetime import date

import pytest

from budget_buddy import dashboard
from budget_buddy.app import BudgetBuddy
from budget_buddy.budgets import OverBudgetMonitor
from budget_buddy.models import Category


@pytest.fixture
def fake_st(monkeypatch):
    namespace = types.SimpleNamespace(session_state={})
    monkeypatch.setattr(dashboard, 'st', namespace)
    return namespace


@pytest.fixture
def app(store):
    return BudgetBuddy(store=store, clock=lambda: date(2024, 6, 10))


def test_get_app_reuses_session_controller(fake_st, app) -> None:
    fake_st.session_state['budget_buddy'] = app
    assert dashboard._get_app() is app


def test_alert_state_created_once(fake_st) -> None:
    monitor = dashboard._ensure_alert_state()
    assert isinstance(monitor, OverBudgetMonitor)
    assert dashboard._ensure_alert_state() is monitor


def test_over_budget_alert_shown_once(fake_st, app) -> None:
    app.add_expense('Pizza party', 450, Category.FOOD)
    assert dashboard._new_over_budget_alerts(app) == [Category.FOOD]
    assert dashboard._new_over_budget_alerts(app) == []


def test_rerun_prefers_streamlit_rerun(monkeypatch) -> None:
    calls = []
    namespace = types.SimpleNamespace(
        rerun=lambda: calls.append('rerun'),
        experimental_rerun=lambda: calls.append('experimental'),
    )
    monkeypatch.setattr(dashboard, 'st', namespace)
    dashboard._rerun()
    assert calls == ['rerun']


def test_rerun_falls_back_to_experimental(monkeypatch) -> None:
    calls = []
    namespace = types.SimpleNamespace(experimental_rerun=lambda: calls.append('experimental'))
    monkeypatch.setattr(dashboard, 'st', namespace)
    dashboard._rerun()
    assert calls == ['experimental']


def _widget_namespace(session_state, button_pressed, calls):
    return types.SimpleNamespace(
        session_state=session_state,
        subheader=lambda *a, **k: None,
        text=lambda *a, **k: None,
        progress=lambda *a, **k: None,
        number_input=lambda *a, **k: 100.0,
        button=lambda *a, **k: button_pressed,
        error=lambda message: calls.append(('error', message)),
        success=lambda message: calls.append(('success', message)),
        balloons=lambda: calls.append(('balloons', None)),
        rerun=lambda: calls.append(('rerun', None)),
    )


def test_savings_rerun_and_celebrate_after_rerun(monkeypatch, store, app) -> None:
    from budget_buddy.preferences import save_pocket_money_info

    save_pocket_money_info(store, 500)
    app.set_goal('Watch', 100)
    session_state = {}
    calls = []

    monkeypatch.setattr(dashboard, 'st', _widget_namespace(session_state, True, calls))
    dashboard._render_savings(app)
    assert calls == [('rerun', None)]
    assert session_state['goal_celebration'] == 'Watch'
    assert store.load().savings_goal.completed is True

    calls.clear()
    monkeypatch.setattr(dashboard, 'st', _widget_namespace(session_state, False, calls))
    dashboard._render_savings(app)
    assert calls == [('balloons', None), ('success', 'Goal achieved: Watch!')]
    assert 'goal_celebration' not in session_state


def test_weekly_summary_taken_once_per_session(fake_st, app, store) -> None:
    from budget_buddy.preferences import save_pocket_money_info

    save_pocket_money_info(store, 400)
    first = dashboard._pending_weekly_summary(app)
    assert first is not None
    assert dashboard._pending_weekly_summary(app) is first
