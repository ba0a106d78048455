"""Infrastructure layer — SQLite store, transactions, aggregate queries.

This layer depends on stdlib and SQLAlchemy. It may import domain types
to hand typed entities upward, but never services, commands, or output.
"""
