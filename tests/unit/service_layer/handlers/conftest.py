"""Pytest fixtures for service layer handler unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from .fakes import bootstrap_test_bus

if TYPE_CHECKING:
    from gigflow.service_layer.messagebus import MessageBus

# pylint: disable=redefined-outer-name


@pytest.fixture
def bus_params(fixed_clock):
    """Default bus parameters. Classes can override this fixture"""
    return {"clock": fixed_clock}


@pytest.fixture
def make_test_bus(bus_params) -> Callable[..., MessageBus]:
    """Factory to create a message bus over an in-memory unit of work."""

    def _make():
        return bootstrap_test_bus(**bus_params)

    return _make
