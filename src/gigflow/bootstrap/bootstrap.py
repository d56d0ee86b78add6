"""Bootstrap the message bus with handlers and unit of work."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime

from gigflow import config
from gigflow.adapters.db.engine import make_engine
from gigflow.adapters.id_generators import UUIDv4Generator
from gigflow.adapters.unit_of_work import SqlAlchemyUnitOfWork
from gigflow.domain.utils import utc_now
from gigflow.interfaces.id_generator import IdGenerator
from gigflow.interfaces.unit_of_work import AbstractUnitOfWork
from gigflow.service_layer.handlers import COMMAND_HANDLERS, QUERY_HANDLERS
from gigflow.service_layer.messagebus import MessageBus


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    message_bus: MessageBus


def build_write_uow(url: str) -> AbstractUnitOfWork:
    """Build a new unit of work backed by the database at ``url``."""
    engine = make_engine(url)
    return SqlAlchemyUnitOfWork(engine)


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: Mapping[type, Callable[..., object]] = COMMAND_HANDLERS,
    query_handlers: Mapping[type, Callable[..., object]] = QUERY_HANDLERS,
    *,
    id_generator: IdGenerator | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> MessageBus:
    """Build a message bus with injected dependencies.

    A bus and its unit of work serve one caller at a time; build one per
    thread when calling the core concurrently.
    """
    dependencies = {
        "uow": uow,
        "id_generator": id_generator or UUIDv4Generator(),
        "clock": clock,
    }

    def inject_all(handlers: Mapping[type, Callable[..., object]]):
        return {
            message_type: inject_dependencies(handler, dependencies)
            for message_type, handler in handlers.items()
        }

    return MessageBus(
        uow,
        command_handlers=inject_all(command_handlers),
        query_handlers=inject_all(query_handlers),
    )


def bootstrap(db_url: str | None = None) -> AppContainer:
    """Wire the production message bus against ``db_url`` (or GIGFLOW_DB_URL)."""
    uow = build_write_uow(db_url or config.get_db_url())
    message_bus = build_message_bus(uow)

    return AppContainer(
        message_bus=message_bus,
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler declares in its signature."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
