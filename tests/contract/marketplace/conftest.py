"""Fixtures for the marketplace contract tests.

`make_bus` builds a fresh message bus over one shared backing store each
time it is called. Threads that call the core concurrently each build their
own bus, the way a server would serve one request per worker.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from gigflow.adapters.repositories.in_memory_adapters import InMemoryStoreData
from gigflow.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from gigflow.bootstrap import build_message_bus
from gigflow.service_layer.messagebus import MessageBus

BusFactory = Callable[[], MessageBus]


@pytest.fixture(params=["memory", "sql_file", "postgres"])
def make_bus(request: pytest.FixtureRequest) -> BusFactory:
    """Factory for message buses sharing one store of the requested backend.

    Engines are requested lazily so the Postgres container only starts for the
    ``postgres`` parameter.
    """
    match request.param:
        case "memory":
            data = InMemoryStoreData()
            return lambda: build_message_bus(InMemoryUnitOfWork(data))
        case "sql_file":
            engine = request.getfixturevalue("sqlite_engine_file")
        case "postgres":
            engine = request.getfixturevalue("postgres_engine")
        case _:
            raise ValueError(f"unknown store type: {request.param}")
    return lambda: build_message_bus(SqlAlchemyUnitOfWork(engine))
