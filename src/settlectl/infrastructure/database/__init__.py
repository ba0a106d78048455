"""SQLite database engine and schema via SQLAlchemy Core."""

from settlectl.infrastructure.database.engine import create_db_engine, init_database
from settlectl.infrastructure.database.schema import contracts, jobs, metadata, profiles

__all__ = [
    "contracts",
    "create_db_engine",
    "init_database",
    "jobs",
    "metadata",
    "profiles",
]
