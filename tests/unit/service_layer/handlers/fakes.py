"""Fake implementations for testing service layer handlers."""

from gigflow.adapters.id_generators import SimpleIdGenerator
from gigflow.adapters.unit_of_work import InMemoryUnitOfWork
from gigflow.bootstrap.bootstrap import build_message_bus
from gigflow.service_layer.handlers import COMMAND_HANDLERS, QUERY_HANDLERS
from tests.fixtures.datagen import FixedClock


class FakeUoW(InMemoryUnitOfWork):
    """In-memory unit of work that records whether it was committed."""

    def __init__(self):
        super().__init__()
        self.committed = False

    def _commit(self):
        super()._commit()
        self.committed = True


def bootstrap_test_bus(clock=None):
    """Bootstrap a message bus for testing purposes."""
    return build_message_bus(
        uow=FakeUoW(),
        command_handlers=COMMAND_HANDLERS,
        query_handlers=QUERY_HANDLERS,
        id_generator=SimpleIdGenerator(),
        clock=clock or FixedClock(),
    )
