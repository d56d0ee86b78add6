"""Fixtures for id_generator contract tests."""

from collections.abc import Iterable

import pytest

from gigflow.adapters.id_generators import SimpleIdGenerator, UUIDv4Generator
from gigflow.interfaces.id_generator import IdGenerator


@pytest.fixture(params=["uuid4", "simple"])
def id_generator(
    request: pytest.FixtureRequest,
) -> Iterable[IdGenerator]:
    """Return a fresh IdGenerator instance for the requested backend.

    Supported params:
      - `"uuid4"` → UUIDv4Generator
      - `"simple"` → SimpleIdGenerator
    """

    match request.param:
        case "uuid4":
            yield UUIDv4Generator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")
