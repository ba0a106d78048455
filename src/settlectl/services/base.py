"""BaseService — abstract foundation for all settlectl services.

Every service receives a :class:`Ledger` at construction time, plus an
optional clock. The Ledger provides lookups and the scoped write
transaction; services own their transaction boundaries via
``self._ledger.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from settlectl.services._helpers import utc_now

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from settlectl.infrastructure.ledger import Ledger


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class SettlementService(BaseService):
            def pay_job(self, caller_id: int, job_id: int) -> ServiceResult:
                with self._ledger.transaction() as txn:
                    ...
    """

    def __init__(self, ledger: Ledger, *, clock: Callable[[], datetime] | None = None) -> None:
        self._ledger = ledger
        self._clock = clock or utc_now
