"""Exceptions raised by persistence adapters.

Repositories raise these instead of driver exceptions. They never leave the
core: the message bus translates them into `GigflowError` kinds.
"""


class StoreError(Exception):
    """Base class for persistence errors."""


class RecordNotFoundError(StoreError):
    """A row addressed by primary key does not exist.

    Attributes:
        table (str): Logical table/collection name (e.g. "jobs").
        record_id (str): The primary key that was looked up.
    """

    def __init__(self, table: str, record_id: str) -> None:
        super().__init__(f"No row with id '{record_id}' in {table}.")
        self.table = table
        self.record_id = record_id


class DuplicateRecordError(StoreError):
    """A write violated a uniqueness constraint.

    Attributes:
        table (str): Logical table/collection name.
        detail (str): Description of the violated rule.
    """

    def __init__(self, table: str, detail: str) -> None:
        super().__init__(f"Uniqueness violation in {table}: {detail}")
        self.table = table
        self.detail = detail


class StoreUnavailableError(StoreError):
    """The store could not be reached or the driver failed unexpectedly."""


class OperationCancelledError(StoreError):
    """The caller's context was cancelled or its deadline passed mid-operation."""
