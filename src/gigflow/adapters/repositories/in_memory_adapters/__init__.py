"""In-memory repository adapters.

All repositories built on the same `InMemoryStoreData` see the same records.
Data is lost when the store is discarded; use for unit tests and prototyping.
"""

from .applications import InMemoryApplicationRepository
from .invoices import InMemoryInvoiceRepository
from .jobs import InMemoryJobRepository
from .store import InMemoryStoreData

__all__ = [
    "InMemoryApplicationRepository",
    "InMemoryInvoiceRepository",
    "InMemoryJobRepository",
    "InMemoryStoreData",
]
