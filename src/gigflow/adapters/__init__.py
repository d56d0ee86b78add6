"""Adapters (infrastructure) for GIGFLOW.

Concrete implementations of the ports in `gigflow.interfaces`: SQLAlchemy and
in-memory repositories, units of work, id generators, plus engine creation,
schema metadata and migrations.

Dependency rule: may import `gigflow.domain` and `gigflow.interfaces`; neither
of those may import this package.
"""
