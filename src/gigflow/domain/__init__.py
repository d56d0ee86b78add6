"""Domain layer: entities, value objects, transition tables and errors."""

from .models import Invoice, Job, JobApplication
from .value_objects import ApplicationState, InvoiceState, JobState, Relationship

__all__ = [
    "ApplicationState",
    "Invoice",
    "InvoiceState",
    "Job",
    "JobApplication",
    "JobState",
    "Relationship",
]
