"""Alembic migration environment and scripts for GIGFLOW."""
