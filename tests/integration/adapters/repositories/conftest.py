"""Fixtures shared by the SQLAlchemy repository integration tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from gigflow.adapters.unit_of_work import SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=redefined-outer-name


@pytest.fixture
def uow(engine: Engine) -> SqlAlchemyUnitOfWork:
    """A unit of work over the parametrized engine."""
    return SqlAlchemyUnitOfWork(engine)


@pytest.fixture
def seed(uow: SqlAlchemyUnitOfWork) -> Callable[..., None]:
    """Persist jobs, applications and invoices in one committed transaction."""

    def _seed(jobs=(), applications=(), invoices=()) -> None:
        with uow:
            for job in jobs:
                uow.jobs.add(job)
            for application in applications:
                uow.applications.add(application)
            for invoice in invoices:
                uow.invoices.add(invoice)
            uow.commit()

    return _seed
