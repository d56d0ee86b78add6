"""Relational schema for jobs, job applications and invoices.

Constraints (enforced here):

| Constraint                                   | Purpose                                  |
|----------------------------------------------|------------------------------------------|
| CHECK(rate > 0), CHECK(duration > 0), ...    | job parameters are positive              |
| UNIQUE(job_id, contractor_id)                | one application per contractor and job   |
| UNIQUE INDEX(job_id) WHERE state='Accepted'  | at most one accepted application per job |
| UNIQUE(job_id, interval_number)              | no duplicate invoice intervals           |
| CHECK(interval_number >= 1), CHECK(value>=0) | interval numbering and value domain      |

Applications and invoices reference their job with ``ON DELETE CASCADE`` so
neither can outlive it.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
    text,
)

from gigflow.adapters.db.metadata import metadata
from gigflow.adapters.db.sa_types import UTCDateTime

__all__ = ["invoices", "job_applications", "jobs"]

ID_LENGTH = 36
STATE_LENGTH = 16

jobs = Table(
    "jobs",
    metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column(
        "employer_id",
        String(ID_LENGTH),
        nullable=False,
        comment="Identity that posted the job.",
    ),
    Column(
        "contractor_id",
        String(ID_LENGTH),
        nullable=True,
        comment="Assigned contractor; NULL until an application is accepted.",
    ),
    Column("rate", Float, nullable=False, comment="Hourly rate."),
    Column("duration", Integer, nullable=False, comment="Total hours."),
    Column(
        "invoice_interval",
        Integer,
        nullable=False,
        comment="Hours billed by each invoice.",
    ),
    Column("state", String(STATE_LENGTH), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    CheckConstraint("rate > 0", name="positive_rate"),
    CheckConstraint("duration > 0", name="positive_duration"),
    CheckConstraint("invoice_interval > 0", name="positive_invoice_interval"),
    CheckConstraint(
        "state IN ('Waiting', 'Ongoing', 'Complete', 'Archived')", name="valid_state"
    ),
    CheckConstraint(
        "state <> 'Waiting' OR contractor_id IS NULL",
        name="waiting_is_unassigned",
    ),
    Index(None, "employer_id", "created_at"),
    Index(None, "contractor_id", "created_at"),
    Index(None, "state", "created_at"),
    comment="Jobs posted by employers.",
)

job_applications = Table(
    "job_applications",
    metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column(
        "job_id",
        String(ID_LENGTH),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("contractor_id", String(ID_LENGTH), nullable=False),
    Column("state", String(STATE_LENGTH), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    UniqueConstraint("job_id", "contractor_id"),
    CheckConstraint(
        "state IN ('Waiting', 'Accepted', 'Rejected', 'Withdrawn')",
        name="valid_state",
    ),
    Index(
        "uq_job_applications_job_id_accepted",
        "job_id",
        unique=True,
        postgresql_where=text("state = 'Accepted'"),
        sqlite_where=text("state = 'Accepted'"),
    ),
    Index(None, "contractor_id", "created_at"),
    comment="Contractor applications to jobs.",
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column(
        "job_id",
        String(ID_LENGTH),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "interval_number",
        Integer,
        nullable=False,
        comment="1-based interval billed by this invoice.",
    ),
    Column("value", Float, nullable=False),
    Column("state", String(STATE_LENGTH), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    UniqueConstraint("job_id", "interval_number"),
    CheckConstraint("interval_number >= 1", name="positive_interval_number"),
    CheckConstraint("value >= 0", name="non_negative_value"),
    CheckConstraint("state IN ('Waiting', 'Complete')", name="valid_state"),
    comment="One invoice per billed interval of a job.",
)
