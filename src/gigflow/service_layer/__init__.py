"""Service layer for GIGFLOW.

Commands and queries, one handler per operation, the authorization guard and
the message bus that is the boundary of the core.
"""
