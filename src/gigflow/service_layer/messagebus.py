"""Message bus: dispatch of commands and queries, and the error boundary.

Every failure leaving `MessageBus.handle` is a `GigflowError`:

- `GigflowError` raised by a handler propagates unchanged;
- `RecordNotFoundError` becomes `NotFoundError`;
- `DuplicateRecordError` becomes `ConflictError`;
- anything else (driver failures, cancellations, bugs) becomes `InternalError`
  naming the operation, with the original exception as its cause.

The unit of work has already rolled back by the time the error reaches the
bus, because handlers run their writes inside ``with uow``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from gigflow.domain.errors import (
    ConflictError,
    GigflowError,
    InternalError,
    NotFoundError,
)
from gigflow.interfaces.call_context import CallContext
from gigflow.interfaces.errors import DuplicateRecordError, RecordNotFoundError
from gigflow.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command
from .queries import Query

logger = logging.getLogger(__name__)

Message = Command | Query

# pylint: disable=too-few-public-methods


class NoHandlerForMessage(LookupError):
    """Exception raised when no handler is registered for a message type."""

    def __init__(self, message: Message) -> None:
        super().__init__(f"No handler found for message {type(message).__name__}")


class MessageBus:
    """Route commands and queries to their handlers.

    Args:
        uow: The unit of work injected into the handlers. The bus binds the
            caller's `CallContext` to it before each dispatch.
        command_handlers: A mapping of command types to their handlers.
        query_handlers: A mapping of query types to their handlers.

    Handlers are callables taking the message as their only argument;
    dependencies are injected beforehand (see `gigflow.bootstrap`).

    Note:
        Dispatch is synchronous. The bus performs no retries: a caller seeing
        `InternalError` or `ConflictError` retries the whole operation.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: Mapping[type[Command], Callable[..., object]],
        query_handlers: Mapping[type[Query], Callable[..., object]] | None = None,
    ) -> None:
        self.uow = uow
        self._handlers: dict[type, Callable[..., object]] = {
            **command_handlers,
            **(query_handlers or {}),
        }

    def handle(self, message: Message, context: CallContext | None = None) -> object:
        """Dispatch a message and return the handler's result.

        Args:
            message: The command or query to handle.
            context: Optional cancellation/deadline for this operation.

        Returns:
            Whatever the handler returns (an entity, a list, or ``None``).

        Raises:
            NoHandlerForMessage: If no handler is registered for the message type.
            GigflowError: For every failure of the operation.
        """

        if not (handler := self._handlers.get(type(message))):
            logger.error("No handler found for message %s", type(message).__name__)
            raise NoHandlerForMessage(message)

        operation = type(message).__name__
        handler_name = self._get_handler_name(handler)
        logger.debug("Handling message %s with handler %s", message, handler_name)

        self.uow.bind(context)
        try:
            return handler(message)
        except GigflowError as e:
            logger.debug("%s rejected: %s (%s)", operation, e.kind.value, e)
            raise
        except RecordNotFoundError as e:
            raise NotFoundError(e.table, e.record_id, cause=e) from e
        except DuplicateRecordError as e:
            logger.info("%s conflicted: %s", operation, e)
            raise ConflictError(f"{operation}: {e.detail}", cause=e) from e
        except Exception as e:  # pylint: disable=broad-except
            logger.exception(
                "Exception handling message %s with handler %s", message, handler_name
            )
            raise InternalError(f"{operation} failed: {e}", cause=e) from e
        finally:
            self.uow.bind(None)

    @staticmethod
    def _get_handler_name(fn: Callable[..., object]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
