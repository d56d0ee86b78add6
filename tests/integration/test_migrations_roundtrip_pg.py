"""Alembic round-trip smoke test for PostgreSQL.

Validates that the migrations upgrade to head and downgrade to base cleanly
on a real PostgreSQL 17 instance provisioned by Testcontainers:

  1) runs `alembic upgrade head` on a fresh database,
  2) asserts the tables exist and the partial unique index is enforced,
  3) runs `alembic downgrade base`,
  4) asserts the tables are gone.
"""

import pytest
from sqlalchemy import create_engine, insert, text
from sqlalchemy.exc import IntegrityError

from alembic import command
from gigflow import config
from gigflow.adapters.repositories.schema import job_applications, jobs
from tests.fixtures.datagen import EPOCH

# mypy: disable-error-code=no-untyped-def

GIGFLOW_TABLES = ("jobs", "job_applications", "invoices")


def _exists(conn, table: str) -> bool:
    return conn.execute(
        text("SELECT to_regclass(:name) IS NOT NULL"), {"name": f"public.{table}"}
    ).scalar_one()


def test_alembic_downgrade_upgrade_roundtrip_postgres(pg_url_base: str):
    """Upgrade → assert → Downgrade → assert on a fresh Postgres database."""
    command.upgrade(config.build_alembic_config(pg_url_base), "head")
    eng = create_engine(pg_url_base, pool_pre_ping=True)

    with eng.connect() as c:
        assert all(_exists(c, table) for table in GIGFLOW_TABLES)

    stamp = {"created_at": EPOCH, "updated_at": EPOCH}
    with eng.begin() as c:
        c.execute(
            insert(jobs).values(
                id="job-1",
                employer_id="employer-1",
                contractor_id=None,
                rate=10.0,
                duration=20,
                invoice_interval=5,
                state="Waiting",
                **stamp,
            )
        )
        c.execute(
            insert(job_applications).values(
                id="app-1",
                job_id="job-1",
                contractor_id="contractor-1",
                state="Accepted",
                **stamp,
            )
        )
    with pytest.raises(IntegrityError, match="uq_job_applications_job_id_accepted"):
        with eng.begin() as c:
            c.execute(
                insert(job_applications).values(
                    id="app-2",
                    job_id="job-1",
                    contractor_id="contractor-2",
                    state="Accepted",
                    **stamp,
                )
            )

    command.downgrade(config.build_alembic_config(pg_url_base), "base")

    with eng.connect() as c:
        assert not any(_exists(c, table) for table in GIGFLOW_TABLES)
    eng.dispose()
