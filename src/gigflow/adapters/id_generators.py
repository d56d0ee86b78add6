"""ID generators for GIGFLOW."""

import itertools
import threading
import uuid

from gigflow.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class UUIDv4Generator(IdGenerator):
    """UUIDv4 generator.

    Entity ids are random UUIDs rendered in their canonical 36-character form.
    """

    def new_id(self) -> str:
        """Generate a new UUID."""
        return str(uuid.uuid4())


class SimpleIdGenerator(IdGenerator):
    """Sequential ids with an optional prefix (``job-1``, ``job-2``, ...).

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, prefix: str = "id") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate the next identifier."""
        with self._lock:
            return f"{self._prefix}-{next(self._counter)}"
