"""
Dashboard figures for the admin portal.

Compares one month's jobs against the month before it and adds all-time
totals, the latest jobs and the busiest customer companies.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from fiverivers.crud import company as company_crud
from fiverivers.crud import dispatcher as dispatcher_crud
from fiverivers.crud import driver as driver_crud
from fiverivers.crud import invoice as invoice_crud
from fiverivers.crud import job as job_crud
from fiverivers.models.company import Company
from fiverivers.models.job import Job
from fiverivers.services.base import read_guard
from fiverivers.services.calculation import round_money
from fiverivers.services.invoice import month_range

RECENT_JOBS = 10
TOP_COMPANIES = 5


@dataclass
class MonthlyStats:
    total_jobs: int = 0
    total_dispatchers: int = 0
    total_drivers: int = 0
    total_invoices: int = 0
    total_amount: float = 0.0
    average_job_value: float = 0.0


@dataclass
class MonthlyComparison:
    current: MonthlyStats
    previous: MonthlyStats
    percentage_change: float
    jobs_change: int
    amount_change: float


@dataclass
class OverallStats(MonthlyStats):
    total_companies: int = 0


@dataclass
class DashboardStats:
    monthly_comparison: MonthlyComparison
    overall_stats: OverallStats
    recent_jobs: List[Job] = field(default_factory=list)
    top_companies: List[Company] = field(default_factory=list)


def previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def percentage_change(current: float, previous: float) -> float:
    """Relative change in percent; growth from nothing counts as 100%."""
    if not previous:
        return 100.0 if current > 0 else 0.0
    return round_money((current - previous) / previous * 100)


class DashboardService:
    """Read-only aggregates over jobs, invoices and the fleet."""

    def month_stats(self, db: Session, year: int, month: int) -> MonthlyStats:
        date_from, date_to = month_range(month, year)
        jobs = job_crud.stats(db, date_from=date_from, date_to=date_to)
        return MonthlyStats(
            total_jobs=jobs["total_jobs"],
            total_dispatchers=jobs["total_dispatchers"],
            total_drivers=jobs["total_drivers"],
            total_invoices=invoice_crud.count_between(db, date_from=date_from, date_to=date_to),
            total_amount=round_money(jobs["total_amount"]),
            average_job_value=round_money(jobs["average_job_value"]),
        )

    def overall_stats(self, db: Session) -> OverallStats:
        jobs = job_crud.stats(db)
        return OverallStats(
            total_jobs=jobs["total_jobs"],
            total_dispatchers=dispatcher_crud.count(db),
            total_drivers=driver_crud.count(db),
            total_invoices=invoice_crud.count(db),
            total_companies=company_crud.count(db),
            total_amount=round_money(jobs["total_amount"]),
            average_job_value=round_money(jobs["average_job_value"]),
        )

    def get_stats(self, db: Session, year: Optional[int] = None, month: Optional[int] = None) -> DashboardStats:
        """
        Dashboard figures for ``month``/``year``, defaulting to the current month.

        Raises:
            HTTPException 400: If month is outside 1-12
        """
        today = date.today()
        if year is None:
            year = today.year
        if month is None:
            month = today.month
        if not 1 <= month <= 12:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Month must be between 1 and 12"
            )

        with read_guard("fetch dashboard stats"):
            current = self.month_stats(db, year, month)
            previous = self.month_stats(db, *previous_month(year, month))
            comparison = MonthlyComparison(
                current=current,
                previous=previous,
                percentage_change=percentage_change(current.total_amount, previous.total_amount),
                jobs_change=current.total_jobs - previous.total_jobs,
                amount_change=round_money(current.total_amount - previous.total_amount),
            )
            return DashboardStats(
                monthly_comparison=comparison,
                overall_stats=self.overall_stats(db),
                recent_jobs=job_crud.get_multi(db, limit=RECENT_JOBS),
                top_companies=company_crud.top_by_jobs(db, limit=TOP_COMPANIES),
            )


# Create a singleton instance
dashboard_service = DashboardService()
