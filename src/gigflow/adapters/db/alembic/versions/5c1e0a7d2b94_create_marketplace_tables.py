"""create jobs, job_applications and invoices tables

Revision ID: 5c1e0a7d2b94
Revises:
Create Date: 2026-10-19 09:14:27.418532

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

import gigflow.adapters.db.sa_types

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "5c1e0a7d2b94"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ACCEPTED_ONLY = sa.text("state = 'Accepted'")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", gigflow.adapters.db.sa_types.UTCDateTime(), nullable=False
        ),
        sa.Column(
            "updated_at", gigflow.adapters.db.sa_types.UTCDateTime(), nullable=False
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "jobs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column(
            "employer_id",
            sa.String(length=36),
            nullable=False,
            comment="Identity that posted the job.",
        ),
        sa.Column(
            "contractor_id",
            sa.String(length=36),
            nullable=True,
            comment="Assigned contractor; NULL until an application is accepted.",
        ),
        sa.Column("rate", sa.Float(), nullable=False, comment="Hourly rate."),
        sa.Column("duration", sa.Integer(), nullable=False, comment="Total hours."),
        sa.Column(
            "invoice_interval",
            sa.Integer(),
            nullable=False,
            comment="Hours billed by each invoice.",
        ),
        sa.Column("state", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("rate > 0", name=op.f("ck_jobs_positive_rate")),
        sa.CheckConstraint("duration > 0", name=op.f("ck_jobs_positive_duration")),
        sa.CheckConstraint(
            "invoice_interval > 0", name=op.f("ck_jobs_positive_invoice_interval")
        ),
        sa.CheckConstraint(
            "state IN ('Waiting', 'Ongoing', 'Complete', 'Archived')",
            name=op.f("ck_jobs_valid_state"),
        ),
        sa.CheckConstraint(
            "state <> 'Waiting' OR contractor_id IS NULL",
            name=op.f("ck_jobs_waiting_is_unassigned"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_jobs")),
        comment="Jobs posted by employers.",
    )
    op.create_index(
        op.f("ix_jobs_employer_id_created_at"), "jobs", ["employer_id", "created_at"]
    )
    op.create_index(
        op.f("ix_jobs_contractor_id_created_at"),
        "jobs",
        ["contractor_id", "created_at"],
    )
    op.create_index(op.f("ix_jobs_state_created_at"), "jobs", ["state", "created_at"])

    op.create_table(
        "job_applications",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=False),
        sa.Column("contractor_id", sa.String(length=36), nullable=False),
        sa.Column("state", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "state IN ('Waiting', 'Accepted', 'Rejected', 'Withdrawn')",
            name=op.f("ck_job_applications_valid_state"),
        ),
        sa.ForeignKeyConstraint(
            ["job_id"],
            ["jobs.id"],
            name=op.f("fk_job_applications_job_id_jobs"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_job_applications")),
        sa.UniqueConstraint(
            "job_id",
            "contractor_id",
            name=op.f("uq_job_applications_job_id_contractor_id"),
        ),
        comment="Contractor applications to jobs.",
    )
    op.create_index(
        "uq_job_applications_job_id_accepted",
        "job_applications",
        ["job_id"],
        unique=True,
        postgresql_where=ACCEPTED_ONLY,
        sqlite_where=ACCEPTED_ONLY,
    )
    op.create_index(
        op.f("ix_job_applications_contractor_id_created_at"),
        "job_applications",
        ["contractor_id", "created_at"],
    )

    op.create_table(
        "invoices",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=False),
        sa.Column(
            "interval_number",
            sa.Integer(),
            nullable=False,
            comment="1-based interval billed by this invoice.",
        ),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("state", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "interval_number >= 1", name=op.f("ck_invoices_positive_interval_number")
        ),
        sa.CheckConstraint("value >= 0", name=op.f("ck_invoices_non_negative_value")),
        sa.CheckConstraint(
            "state IN ('Waiting', 'Complete')", name=op.f("ck_invoices_valid_state")
        ),
        sa.ForeignKeyConstraint(
            ["job_id"],
            ["jobs.id"],
            name=op.f("fk_invoices_job_id_jobs"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_invoices")),
        sa.UniqueConstraint(
            "job_id",
            "interval_number",
            name=op.f("uq_invoices_job_id_interval_number"),
        ),
        comment="One invoice per billed interval of a job.",
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("invoices")
    op.drop_index(
        op.f("ix_job_applications_contractor_id_created_at"),
        table_name="job_applications",
    )
    op.drop_index("uq_job_applications_job_id_accepted", table_name="job_applications")
    op.drop_table("job_applications")
    op.drop_index(op.f("ix_jobs_state_created_at"), table_name="jobs")
    op.drop_index(op.f("ix_jobs_contractor_id_created_at"), table_name="jobs")
    op.drop_index(op.f("ix_jobs_employer_id_created_at"), table_name="jobs")
    op.drop_table("jobs")
