"""Top-level package for finboard.

finboard turns raw financial records (transactions, categories, budgets,
savings goals and bank accounts) into the figures a personal finance
dashboard shows. The primary modules are:

* ``aggregation``, ``budgets``, ``goals`` and ``reports`` - pure functions
  over record snapshots
* ``services`` - CRUD operations and business rules over injected stores
* ``db`` - the SQLite record store
* ``frames`` and ``visualization`` - pandas frames and Plotly figures

A typical session:

```python
from finboard.services import FinanceBook

book = FinanceBook.sqlite()
book.categories.seed_defaults()
snapshot = book.dashboard()
```
"""

from . import aggregation  # noqa: F401  # re-exported for convenience
from . import budgets  # noqa: F401
from . import goals  # noqa: F401
from . import reports  # noqa: F401
from .errors import FinboardError, NotFoundError, ValidationError

__version__ = "0.1.0"

__all__ = [
    "aggregation",
    "budgets",
    "goals",
    "reports",
    "FinboardError",
    "NotFoundError",
    "ValidationError",
]
