"""SQLAlchemy-backed InvoiceRepository."""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

from sqlalchemy import RowMapping, Select, delete, func, insert, select, update

from gigflow.domain.models import Invoice
from gigflow.domain.value_objects import InvoiceState
from gigflow.interfaces.errors import RecordNotFoundError
from gigflow.interfaces.repositories import InvoiceRepository, Page

from ..schema import invoices
from .base import SqlAlchemyRepository


def invoice_from_row(row: RowMapping) -> Invoice:
    """Rehydrate an `Invoice` from an ``invoices`` row."""
    return Invoice(
        id=row["id"],
        job_id=row["job_id"],
        interval_number=row["interval_number"],
        value=row["value"],
        state=InvoiceState(row["state"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class SqlAlchemyInvoiceRepository(SqlAlchemyRepository, InvoiceRepository):
    """InvoiceRepository over the ``invoices`` table.

    The UNIQUE(job_id, interval_number) constraint backs up the row lock the
    service layer takes on the job: should two writers still race, the loser
    gets `DuplicateRecordError` instead of a duplicate interval.
    """

    table_name = "invoices"

    def add(self, invoice: Invoice) -> None:
        row = {
            "id": invoice.id,
            "job_id": invoice.job_id,
            "interval_number": invoice.interval_number,
            "value": invoice.value,
            "state": invoice.state.value,
            "created_at": invoice.created_at,
            "updated_at": invoice.updated_at,
        }
        with self.translate_errors():
            self.connection.execute(insert(invoices).values(row))

    def get(self, invoice_id: str) -> Invoice | None:
        stmt = select(invoices).where(invoices.c.id == invoice_id)
        with self.translate_errors():
            row = self.connection.execute(stmt).mappings().one_or_none()
        return None if row is None else invoice_from_row(row)

    def list_by_job(
        self, job_id: str, page: Page, state: InvoiceState | None = None
    ) -> Sequence[Invoice]:
        stmt: Select = select(invoices).where(invoices.c.job_id == job_id)
        if state is not None:
            stmt = stmt.where(invoices.c.state == state.value)
        stmt = (
            stmt.order_by(invoices.c.interval_number.asc())
            .limit(page.limit)
            .offset(page.offset)
        )
        with self.translate_errors():
            rows = self.connection.execute(stmt).mappings().all()
        return [invoice_from_row(row) for row in rows]

    def max_interval(self, job_id: str) -> int:
        stmt = select(func.max(invoices.c.interval_number)).where(
            invoices.c.job_id == job_id
        )
        with self.translate_errors():
            tip = self.connection.execute(stmt).scalar_one_or_none()
        return cast(int | None, tip) or 0

    def update(self, invoice: Invoice) -> None:
        stmt = (
            update(invoices)
            .where(invoices.c.id == invoice.id)
            .values(state=invoice.state.value, updated_at=invoice.updated_at)
        )
        with self.translate_errors():
            result = self.connection.execute(stmt)
        if result.rowcount == 0:
            raise RecordNotFoundError(self.table_name, invoice.id)

    def delete(self, invoice_id: str) -> None:
        stmt = delete(invoices).where(invoices.c.id == invoice_id)
        with self.translate_errors():
            result = self.connection.execute(stmt)
        if result.rowcount == 0:
            raise RecordNotFoundError(self.table_name, invoice_id)
