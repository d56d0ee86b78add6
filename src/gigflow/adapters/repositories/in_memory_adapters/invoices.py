"""In-memory InvoiceRepository."""

from __future__ import annotations

import copy
from collections.abc import Sequence

from gigflow.domain.models import Invoice
from gigflow.domain.value_objects import InvoiceState
from gigflow.interfaces.errors import (
    DuplicateRecordError,
    RecordNotFoundError,
    StoreError,
)
from gigflow.interfaces.repositories import InvoiceRepository, Page

from .store import InMemoryStoreData

TABLE = "invoices"


class InMemoryInvoiceRepository(InvoiceRepository):
    """InvoiceRepository over an `InMemoryStoreData`."""

    def __init__(self, data: InMemoryStoreData) -> None:
        self._data = data

    @property
    def _bucket(self) -> dict[str, Invoice]:
        return self._data.invoices

    def add(self, invoice: Invoice) -> None:
        if invoice.job_id not in self._data.jobs:
            raise StoreError(f"{TABLE}: job {invoice.job_id!r} does not exist")
        if invoice.id in self._bucket:
            raise DuplicateRecordError(TABLE, f"id {invoice.id!r} already exists")
        if any(
            i.job_id == invoice.job_id and i.interval_number == invoice.interval_number
            for i in self._bucket.values()
        ):
            raise DuplicateRecordError(TABLE, "unique (job_id, interval_number)")
        self._bucket[invoice.id] = copy.copy(invoice)

    def get(self, invoice_id: str) -> Invoice | None:
        invoice = self._bucket.get(invoice_id)
        return None if invoice is None else copy.copy(invoice)

    def list_by_job(
        self, job_id: str, page: Page, state: InvoiceState | None = None
    ) -> Sequence[Invoice]:
        matching = sorted(
            (
                i
                for i in self._bucket.values()
                if i.job_id == job_id and (state is None or i.state is state)
            ),
            key=lambda i: i.interval_number,
        )
        return [copy.copy(i) for i in matching[page.offset : page.offset + page.limit]]

    def max_interval(self, job_id: str) -> int:
        return max(
            (i.interval_number for i in self._bucket.values() if i.job_id == job_id),
            default=0,
        )

    def update(self, invoice: Invoice) -> None:
        if invoice.id not in self._bucket:
            raise RecordNotFoundError(TABLE, invoice.id)
        self._bucket[invoice.id] = copy.copy(invoice)

    def delete(self, invoice_id: str) -> None:
        if self._bucket.pop(invoice_id, None) is None:
            raise RecordNotFoundError(TABLE, invoice_id)
