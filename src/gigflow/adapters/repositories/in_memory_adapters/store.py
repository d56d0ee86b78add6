"""Shared in-memory backing store for the in-memory repositories."""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field

from gigflow.domain.models import Invoice, Job, JobApplication


@dataclass(slots=True)
class InMemoryStoreData:
    """Records of every entity kind, keyed by id.

    A single instance is shared by the three in-memory repositories so that
    cross-entity rules (cascading deletes, foreign keys) can be emulated.

    ``lock`` serializes in-memory units of work the way a ``BEGIN IMMEDIATE``
    transaction serializes SQLite writers; it is not used by the repositories
    themselves.
    """

    jobs: dict[str, Job] = field(default_factory=dict)
    applications: dict[str, JobApplication] = field(default_factory=dict)
    invoices: dict[str, Invoice] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock)

    def snapshot(self) -> InMemoryStoreData:
        """Return a deep copy of the records sharing this store's lock."""
        return InMemoryStoreData(
            jobs=copy.deepcopy(self.jobs),
            applications=copy.deepcopy(self.applications),
            invoices=copy.deepcopy(self.invoices),
            lock=self.lock,
        )

    def restore(self, other: InMemoryStoreData) -> None:
        """Replace the records with those of ``other``."""
        self.jobs = copy.deepcopy(other.jobs)
        self.applications = copy.deepcopy(other.applications)
        self.invoices = copy.deepcopy(other.invoices)
