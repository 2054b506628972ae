from __future__ import annotations

import pytest

from budget_buddy.ledger import ExpenseLedger
from budget_buddy.storage import AppDataStore


@pytest.fixture
def store(tmp_path):
    return AppDataStore(tmp_path / 'app_data.json')


@pytest.fixture
def ledger(store):
    return ExpenseLedger(store)


@pytest.fixture
def set_income(store):
    def _set(amount, payday=1):
        data = store.load()
        data.pocket_money_info.amount = amount
        data.pocket_money_info.payday = payday
        store.save(data)
    return _set
