"""SQLAlchemy Core repository adapters.

Every repository wraps the `Connection` of the unit of work that created it,
so all statements it issues run in that unit's transaction.
"""

from .applications import SqlAlchemyApplicationRepository
from .invoices import SqlAlchemyInvoiceRepository
from .jobs import SqlAlchemyJobRepository

__all__ = [
    "SqlAlchemyApplicationRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyJobRepository",
]
