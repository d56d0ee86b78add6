"""Ports (abstract interfaces) the service layer depends on."""

from .call_context import CallContext
from .errors import (
    DuplicateRecordError,
    OperationCancelledError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
)
from .id_generator import IdGenerator
from .repositories import (
    ApplicationRepository,
    InvoiceRepository,
    JobCriteria,
    JobRepository,
    Page,
    RateRange,
)
from .unit_of_work import AbstractUnitOfWork

__all__ = [
    "AbstractUnitOfWork",
    "ApplicationRepository",
    "CallContext",
    "DuplicateRecordError",
    "IdGenerator",
    "InvoiceRepository",
    "JobCriteria",
    "JobRepository",
    "OperationCancelledError",
    "Page",
    "RateRange",
    "RecordNotFoundError",
    "StoreError",
    "StoreUnavailableError",
]
