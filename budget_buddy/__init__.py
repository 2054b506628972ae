"""Top-level package for Budget Buddy.

Budget Buddy tracks pocket money for students: expenses by month, category
budgets, a daily budget streak and one savings goal.  The primary modules are:

* ``storage`` – the single JSON record and backup/restore
* ``ledger`` – expense CRUD, partitioned by month
* ``category_rules`` – keyword-based category suggestions
* ``budgets``, ``rollover``, ``savings`` – budget, archive and goal logic
* ``analytics`` – pandas summaries for the front end
* ``app`` – the controller a front end talks to
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run budget_buddy/dashboard.py
```
"""

from .app import BudgetBuddy
from .models import AppData, Category, Expense
from .storage import AppDataStore

__all__ = ["AppData", "AppDataStore", "BudgetBuddy", "Category", "Expense"]
