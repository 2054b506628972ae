"""Default values for a fresh Budget Buddy install."""

from __future__ import annotations

from typing import Any, Dict, List

from .models import Category

DEFAULT_CATEGORY_BUDGETS: Dict[Category, float] = {
    Category.FOOD: 400,
    Category.RECHARGE: 100,
    Category.ENTERTAINMENT: 200,
}

DEFAULT_QUICK_EXPENSES: List[Dict[str, Any]] = [
    {'id': 1, 'name': 'Chai', 'amount': 20, 'category': Category.FOOD},
    {'id': 2, 'name': 'Recharge', 'amount': 50, 'category': Category.RECHARGE},
    {'id': 3, 'name': 'Pen', 'amount': 30, 'category': Category.STATIONERY},
    {'id': 4, 'name': 'Movie', 'amount': 150, 'category': Category.ENTERTAINMENT},
    {'id': 5, 'name': 'Bus Fare', 'amount': 15, 'category': Category.TRANSPORT},
    {'id': 6, 'name': 'Snacks', 'amount': 40, 'category': Category.FOOD},
]

DEFAULT_QUICK_EXPENSE_BUTTON_COUNT = 3

# Phrases first for readability only; matching order is by keyword length.
DEFAULT_KEYWORDS: Dict[str, Category] = {
    'movie ticket': Category.ENTERTAINMENT,
    'bus fare': Category.TRANSPORT,
    'metro card': Category.TRANSPORT,
    'phone bill': Category.RECHARGE,
    'ice cream': Category.FOOD,
    'cold drink': Category.FOOD,
    'pencil box': Category.STATIONERY,
    'video game': Category.FUN,
    'amazon prime': Category.ENTERTAINMENT,
    'geometry box': Category.STATIONERY,

    'savings': Category.SAVINGS,
    'saved': Category.SAVINGS,
    'save': Category.SAVINGS,

    'recharge': Category.RECHARGE,
    'jio': Category.RECHARGE,
    'airtel': Category.RECHARGE,
    'vi': Category.RECHARGE,
    'vodafone': Category.RECHARGE,

    'samosa': Category.FOOD,
    'chai': Category.FOOD,
    'canteen': Category.FOOD,
    'pizza': Category.FOOD,
    'burger': Category.FOOD,
    'lunch': Category.FOOD,
    'dinner': Category.FOOD,
    'breakfast': Category.FOOD,
    'snack': Category.FOOD,
    'snacks': Category.FOOD,
    'noodles': Category.FOOD,
    'maggi': Category.FOOD,
    'dosa': Category.FOOD,
    'biryani': Category.FOOD,
    'kfc': Category.FOOD,
    'mcdonalds': Category.FOOD,
    'dominos': Category.FOOD,
    'subway': Category.FOOD,
    'pastry': Category.FOOD,
    'cake': Category.FOOD,
    'juice': Category.FOOD,
    'coffee': Category.FOOD,
    'tea': Category.FOOD,

    'movie': Category.ENTERTAINMENT,
    'game': Category.FUN,
    'gaming': Category.FUN,
    'playstation': Category.FUN,
    'xbox': Category.FUN,
    'netflix': Category.ENTERTAINMENT,
    'spotify': Category.ENTERTAINMENT,
    'hotstar': Category.ENTERTAINMENT,
    'concert': Category.ENTERTAINMENT,
    'fair': Category.FUN,
    'mela': Category.FUN,
    'arcade': Category.FUN,
    'bgmi': Category.FUN,

    'pen': Category.STATIONERY,
    'book': Category.STATIONERY,
    'notebook': Category.STATIONERY,
    'register': Category.STATIONERY,
    'xerox': Category.STATIONERY,
    'photocopy': Category.STATIONERY,
    'print': Category.STATIONERY,
    'notes': Category.STATIONERY,

    'auto': Category.TRANSPORT,
    'bus': Category.TRANSPORT,
    'metro': Category.TRANSPORT,
    'ola': Category.TRANSPORT,
    'uber': Category.TRANSPORT,
    'rapido': Category.TRANSPORT,
    'rickshaw': Category.TRANSPORT,
    'cab': Category.TRANSPORT,
    'taxi': Category.TRANSPORT,
    'train': Category.TRANSPORT,

    'gift': Category.OTHER,
    'present': Category.OTHER,
    'medicine': Category.OTHER,
    'pharmacy': Category.OTHER,
    'clothes': Category.OTHER,
    'shoes': Category.OTHER,
    't-shirt': Category.OTHER,
    'jeans': Category.OTHER,
}


def default_record() -> Dict[str, Any]:
    """Return the default stored record as a fresh JSON-ready dict."""
    return {
        'pocketMoneyInfo': {'amount': None, 'payday': 1, 'source': 'Monthly Income'},
        'allExpenses': {},
        'archivedMonths': [],
        'theme': 'system',
        'lastSeenMonth': None,
        'categoryBudgets': {k.value: v for k, v in DEFAULT_CATEGORY_BUDGETS.items()},
        'passcode': None,
        'onboardingComplete': False,
        'quickExpenses': [
            {**item, 'category': item['category'].value} for item in DEFAULT_QUICK_EXPENSES
        ],
        'quickExpenseButtonCount': DEFAULT_QUICK_EXPENSE_BUTTON_COUNT,
        'budgetStreak': {'count': 0, 'lastCheckedDate': None},
        'savingsGoal': None,
        'hasShownSavingsEducation': False,
        'lastSummaryDate': None,
        'autoCategoryMap': {k: v.value for k, v in DEFAULT_KEYWORDS.items()},
    }
