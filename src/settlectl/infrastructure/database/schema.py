"""SQLAlchemy Core table definitions for the settlement database.

Money columns hold integer cents. Timestamps are naive UTC ``DateTime``
values so SQLite compares them in a single, sortable text format.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)

metadata = MetaData()

profiles = Table(
    "profiles",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("profession", Text, nullable=False),
    Column("balance", Integer, nullable=False, default=0, server_default="0"),  # cents
    Column("role", Text, nullable=False),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    CheckConstraint("balance >= 0", name="ck_profiles_balance_non_negative"),
    CheckConstraint("role IN ('client', 'contractor')", name="ck_profiles_role"),
)

contracts = Table(
    "contracts",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("terms", Text, nullable=False),
    Column("status", Text, nullable=False),
    Column("client_id", Integer, ForeignKey("profiles.id"), nullable=False),
    Column("contractor_id", Integer, ForeignKey("profiles.id"), nullable=False),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    CheckConstraint(
        "status IN ('new', 'in_progress', 'terminated')", name="ck_contracts_status"
    ),
)

jobs = Table(
    "jobs",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("description", Text, nullable=False),
    Column("price", Integer, nullable=False),  # cents
    Column("paid", Boolean, nullable=False, default=False, server_default="0"),
    Column("payment_date", DateTime),
    Column("contract_id", Integer, ForeignKey("contracts.id"), nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime),
    CheckConstraint("price > 0", name="ck_jobs_price_positive"),
    CheckConstraint(
        "(paid = 0 AND payment_date IS NULL) OR (paid = 1 AND payment_date IS NOT NULL)",
        name="ck_jobs_payment_date_iff_paid",
    ),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_contracts_client", contracts.c.client_id)
Index("ix_contracts_contractor", contracts.c.contractor_id)
Index("ix_jobs_contract", jobs.c.contract_id)
Index("ix_jobs_paid_created", jobs.c.paid, jobs.c.created_at)
