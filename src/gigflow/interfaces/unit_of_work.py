"""Unit of Work interface for GIGFLOW.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing the job, application and invoice repositories, all scoped to one
transaction, with commit/rollback.
"""

from __future__ import annotations

import abc

from .call_context import CallContext
from .repositories import ApplicationRepository, InvoiceRepository, JobRepository


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work.

    Every repository reached through the unit shares its transaction. Leaving
    the ``with`` block without calling `commit` discards all changes.
    """

    jobs: JobRepository
    applications: ApplicationRepository
    invoices: InvoiceRepository
    context: CallContext | None = None

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        self.checkpoint()
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit.
        """
        self.rollback()

    def bind(self, context: CallContext | None) -> None:
        """Attach the caller's context for the next operation."""
        self.context = context

    def checkpoint(self) -> None:
        """Abort if the bound call context was cancelled or has expired."""
        if self.context is not None:
            self.context.check()

    def commit(self):
        """Persist changes and finalize the transaction."""
        self.checkpoint()
        self._commit()

    @abc.abstractmethod
    def _commit(self):
        """Backend-specific commit."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
