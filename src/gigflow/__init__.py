"""GIGFLOW

Orchestration core for a freelance marketplace. It coordinates the lifecycle
of jobs, job applications and invoices, enforcing role-based authorization,
explicit state-transition tables and transactional cross-entity consistency.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
