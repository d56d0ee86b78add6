"""Explicit state-transition tables for jobs, applications and invoices.

Each table maps a ``(from_state, to_state)`` edge to the relationships that may
request it. A pair missing from a table is not an edge and is rejected with
`InvalidTransitionError`. Moves that only happen as a side effect of another
operation, such as Waiting → Ongoing when an application is accepted, are not
in any table and so can never be requested directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TypeAlias, TypeVar

from .errors import InvalidTransitionError
from .value_objects import ApplicationState, InvoiceState, JobState, Relationship

S = TypeVar("S", bound=Enum)

TransitionTable: TypeAlias = Mapping[tuple[S, S], frozenset[Relationship]]

_EMPLOYER = frozenset({Relationship.EMPLOYER})
_EMPLOYER_OR_CONTRACTOR = frozenset({Relationship.EMPLOYER, Relationship.CONTRACTOR})

JOB_TRANSITIONS: TransitionTable[JobState] = {
    (JobState.WAITING, JobState.ARCHIVED): _EMPLOYER,
    (JobState.ONGOING, JobState.COMPLETE): _EMPLOYER_OR_CONTRACTOR,
    (JobState.COMPLETE, JobState.ARCHIVED): _EMPLOYER,
}
"""Job edges that can be requested through `UpdateJobState`.

Waiting → Ongoing is deliberately absent: it only happens when an application
is accepted. Archived is terminal.
"""

APPLICATION_TRANSITIONS: TransitionTable[ApplicationState] = {
    (ApplicationState.WAITING, ApplicationState.ACCEPTED): _EMPLOYER,
    (ApplicationState.WAITING, ApplicationState.REJECTED): _EMPLOYER,
    (ApplicationState.WAITING, ApplicationState.WITHDRAWN): frozenset(
        {Relationship.APPLICANT}
    ),
}

INVOICE_TRANSITIONS: TransitionTable[InvoiceState] = {
    (InvoiceState.WAITING, InvoiceState.COMPLETE): _EMPLOYER,
}


def allowed_relationships(
    table: TransitionTable[S], entity: str, from_state: S, to_state: S
) -> frozenset[Relationship]:
    """Look up an edge and return the relationships allowed to request it.

    Args:
        table: The transition table of the entity.
        entity: Entity name used in the error message (e.g. "Job").
        from_state: The current state.
        to_state: The requested state.

    Returns:
        The relationships allowed to request the edge.

    Raises:
        InvalidTransitionError: If ``(from_state, to_state)`` is not an edge.
    """
    if (relationships := table.get((from_state, to_state))) is None:
        raise InvalidTransitionError(entity, from_state.value, to_state.value)
    return relationships
