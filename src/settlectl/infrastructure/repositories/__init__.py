"""Read-side repositories over the settlement database."""

from settlectl.infrastructure.repositories.reports import ReportRepository

__all__ = ["ReportRepository"]
