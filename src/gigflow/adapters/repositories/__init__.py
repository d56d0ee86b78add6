"""Repository adapters for jobs, job applications and invoices.

Two families are provided: SQLAlchemy Core repositories scoped to a single
`Connection`, and in-memory repositories sharing one `InMemoryStoreData`.
"""
