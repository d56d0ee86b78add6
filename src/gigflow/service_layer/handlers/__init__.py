"""Service layer handlers."""

from collections.abc import Callable

from .application_handlers import COMMAND_HANDLERS as APPLICATION_COMMAND_HANDLERS
from .application_handlers import QUERY_HANDLERS as APPLICATION_QUERY_HANDLERS
from .invoice_handlers import COMMAND_HANDLERS as INVOICE_COMMAND_HANDLERS
from .invoice_handlers import QUERY_HANDLERS as INVOICE_QUERY_HANDLERS
from .job_handlers import COMMAND_HANDLERS as JOB_COMMAND_HANDLERS
from .job_handlers import QUERY_HANDLERS as JOB_QUERY_HANDLERS

__all__ = ["COMMAND_HANDLERS", "QUERY_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    **JOB_COMMAND_HANDLERS,
    **APPLICATION_COMMAND_HANDLERS,
    **INVOICE_COMMAND_HANDLERS,
}

QUERY_HANDLERS: dict[type, Callable[..., object]] = {
    **JOB_QUERY_HANDLERS,
    **APPLICATION_QUERY_HANDLERS,
    **INVOICE_QUERY_HANDLERS,
}
