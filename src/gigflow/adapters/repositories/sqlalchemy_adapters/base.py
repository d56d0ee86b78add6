"""Shared plumbing for SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import DBAPIError, IntegrityError

from gigflow.adapters.db.dialects import DialectName
from gigflow.interfaces.errors import (
    DuplicateRecordError,
    StoreError,
    StoreUnavailableError,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

# any of these in the driver message marks a uniqueness violation
UNIQUE_VIOLATION_KEYWORDS = ("unique", "duplicate key")  # pragma: no mutate

EMPTY_STRING = ""  # pragma: no mutate


class SqlAlchemyRepository:
    """Base class holding the connection and the driver-error translation."""

    table_name: str

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    @contextmanager
    def translate_errors(self) -> Iterator[None]:
        """Map SQLAlchemy exceptions raised in the block to store errors.

        Raises:
            DuplicateRecordError: On a uniqueness violation.
            StoreError: On any other integrity violation.
            StoreUnavailableError: On any other driver failure.
        """
        try:
            yield
        except IntegrityError as e:
            msg = str(e.orig) if e.orig not in (None, EMPTY_STRING) else str(e)
            if any(kw in msg.lower() for kw in UNIQUE_VIOLATION_KEYWORDS):
                raise DuplicateRecordError(self.table_name, msg) from e
            raise StoreError(f"Integrity violation in {self.table_name}: {msg}") from e
        except DBAPIError as e:  # OperationalError, InterfaceError, ...
            raise StoreUnavailableError(str(e)) from e
