"""Fixtures for generating test data."""

import datetime
import itertools
from collections.abc import Callable
from typing import Any

import pytest

from gigflow.domain.models import Invoice, Job, JobApplication
from gigflow.domain.value_objects import ApplicationState, InvoiceState, JobState

# pylint: disable=redefined-outer-name

EPOCH = datetime.datetime(2025, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)

_counter = itertools.count(1)


def uuid_like() -> str:
    """Return a deterministic, unique 36-character id."""
    return f"00000000-0000-4000-8000-{next(_counter):012d}"


class FixedClock:
    """Clock returning a fixed instant that tests advance by hand."""

    def __init__(self, start: datetime.datetime = EPOCH) -> None:
        self.now = start

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **delta: float) -> datetime.datetime:
        """Move the clock forward by a ``timedelta(**delta)``."""
        self.now += datetime.timedelta(**delta)
        return self.now


@pytest.fixture
def fixed_clock() -> FixedClock:
    """A clock frozen at 2025-01-01T12:00Z."""
    return FixedClock()


@pytest.fixture
def make_job() -> Callable[..., Job]:
    """Factory fixture: build a `Job` entity with sensible defaults.

    Accepts keyword overrides for any field; for example:
        make_job(rate=50.0, state=JobState.ONGOING, contractor_id="c-1")

    Returns:
        Callable[..., Job]: A builder function.
    """

    def _make_job(**overrides: Any) -> Job:
        base: dict[str, Any] = {
            "id": uuid_like(),
            "employer_id": "employer-1",
            "rate": 100.0,
            "duration": 40,
            "invoice_interval": 10,
            "created_at": EPOCH,
            "updated_at": EPOCH,
            "state": JobState.WAITING,
            "contractor_id": None,
        }
        base.update(overrides)
        return Job(**base)

    return _make_job


@pytest.fixture
def make_application() -> Callable[..., JobApplication]:
    """Factory fixture: build a `JobApplication`; ``job_id`` is required."""

    def _make_application(job_id: str, **overrides: Any) -> JobApplication:
        base: dict[str, Any] = {
            "id": uuid_like(),
            "job_id": job_id,
            "contractor_id": "contractor-1",
            "created_at": EPOCH,
            "updated_at": EPOCH,
            "state": ApplicationState.WAITING,
        }
        base.update(overrides)
        return JobApplication(**base)

    return _make_application


@pytest.fixture
def make_invoice() -> Callable[..., Invoice]:
    """Factory fixture: build an `Invoice`; ``job_id`` is required."""

    def _make_invoice(job_id: str, **overrides: Any) -> Invoice:
        base: dict[str, Any] = {
            "id": uuid_like(),
            "job_id": job_id,
            "interval_number": 1,
            "value": 1000.0,
            "created_at": EPOCH,
            "updated_at": EPOCH,
            "state": InvoiceState.WAITING,
        }
        base.update(overrides)
        return Invoice(**base)

    return _make_invoice
