"""Authorization guard.

Operations declare which relationships to a job (and, for application
operations, to an application) a caller must hold. The guard derives the
caller's relationships from the entities and raises `ForbiddenError` when the
declaration is not met.

Handlers call `authorize` right after loading the entities and before any
state check, so existence errors come first, then authorization errors, then
state errors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gigflow.domain.errors import ForbiddenError
from gigflow.domain.models import Job, JobApplication
from gigflow.domain.value_objects import Relationship

logger = logging.getLogger(__name__)

EMPLOYER = frozenset({Relationship.EMPLOYER})
CONTRACTOR = frozenset({Relationship.CONTRACTOR})
APPLICANT = frozenset({Relationship.APPLICANT})
EMPLOYER_OR_CONTRACTOR = EMPLOYER | CONTRACTOR
EMPLOYER_OR_APPLICANT = EMPLOYER | APPLICANT


def relationships_of(
    caller_id: str, job: Job, application: JobApplication | None = None
) -> frozenset[Relationship]:
    """Return every relationship ``caller_id`` holds to the given entities."""
    held: set[Relationship] = set()
    if caller_id == job.employer_id:
        held.add(Relationship.EMPLOYER)
    if job.contractor_id is not None and caller_id == job.contractor_id:
        held.add(Relationship.CONTRACTOR)
    if application is not None and caller_id == application.contractor_id:
        held.add(Relationship.APPLICANT)
    return frozenset(held)


def authorize(
    caller_id: str,
    action: str,
    *,
    job: Job,
    application: JobApplication | None = None,
    allow: Iterable[Relationship] | None = None,
    deny: Iterable[Relationship] = (),
) -> frozenset[Relationship]:
    """Check the caller against an operation's declared relationships.

    Args:
        caller_id: The trusted caller identity.
        action: Operation name used in the error message and logs.
        job: The job the operation targets (or the job of its application).
        application: The targeted application, if any.
        allow: The caller must hold at least one of these. ``None`` places no
            requirement.
        deny: The caller must hold none of these.

    Returns:
        The caller's relationships.

    Raises:
        ForbiddenError: If the caller does not satisfy the declaration.
    """
    held = relationships_of(caller_id, job, application)
    allowed = allow is None or not held.isdisjoint(allow)
    if not allowed or not held.isdisjoint(deny):
        logger.info(
            "%s: forbidden for caller %s on job %s (holds %s)",
            action,
            caller_id,
            job.id,
            sorted(r.value for r in held) or "no relationship",
        )
        raise ForbiddenError(f"{action}: caller {caller_id} is not permitted.")
    return held
