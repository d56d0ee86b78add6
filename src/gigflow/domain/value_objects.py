"""Module including value objects used across the domain layer."""

from enum import Enum


class JobState(str, Enum):
    """Enumeration of possible job states."""

    WAITING = "Waiting"
    ONGOING = "Ongoing"
    COMPLETE = "Complete"
    ARCHIVED = "Archived"


class ApplicationState(str, Enum):
    """Enumeration of possible job application states."""

    WAITING = "Waiting"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"


class InvoiceState(str, Enum):
    """Enumeration of possible invoice states."""

    WAITING = "Waiting"
    COMPLETE = "Complete"


class Relationship(str, Enum):
    """Relationships a caller identity can hold towards a job or application."""

    EMPLOYER = "employer"
    CONTRACTOR = "contractor"
    APPLICANT = "applicant"
