"""
Tests for dashboard figures and quick search.
"""

from datetime import date

import pytest
from fastapi import HTTPException

from fiverivers.services import company_service, dashboard_service, job_service
from fiverivers.services.dashboard import percentage_change, previous_month


@pytest.fixture
def season(fleet, make_job):
    """One January job and two February jobs, all through the same dispatcher."""
    args = (fleet["job_type"], fleet["driver"], fleet["unit"], fleet["dispatcher"])
    return [
        make_job(*args, job_date=date(2025, 1, 10), job_gross_amount=200),
        make_job(*args, job_date=date(2025, 2, 3), job_gross_amount=300),
        make_job(*args, job_date=date(2025, 2, 17), job_gross_amount=100),
    ]


class TestHelpers:
    def test_previous_month_wraps_year(self):
        assert previous_month(2025, 1) == (2024, 12)
        assert previous_month(2025, 7) == (2025, 6)

    def test_percentage_change(self):
        assert percentage_change(150, 100) == 50.0
        assert percentage_change(50, 100) == -50.0
        assert percentage_change(10, 0) == 100.0
        assert percentage_change(0, 0) == 0.0


class TestDashboardStats:
    def test_month_against_previous(self, db_session, season):
        stats = dashboard_service.get_stats(db_session, year=2025, month=2)

        comparison = stats.monthly_comparison
        assert comparison.current.total_jobs == 2
        assert comparison.current.total_amount == 400.0
        assert comparison.current.average_job_value == 200.0
        assert comparison.current.total_drivers == 1
        assert comparison.current.total_dispatchers == 1
        assert comparison.previous.total_jobs == 1
        assert comparison.previous.total_amount == 200.0
        assert comparison.percentage_change == 100.0
        assert comparison.jobs_change == 1
        assert comparison.amount_change == 200.0

    def test_overall_and_recent(self, db_session, season):
        stats = dashboard_service.get_stats(db_session, year=2025, month=2)

        overall = stats.overall_stats
        assert overall.total_jobs == 3
        assert overall.total_amount == 600.0
        assert overall.total_companies == 1
        assert overall.total_drivers == 1
        assert [job.id for job in stats.recent_jobs] == [season[2].id, season[1].id, season[0].id]

    def test_empty_month(self, db_session, season):
        stats = dashboard_service.get_stats(db_session, year=2024, month=6)

        assert stats.monthly_comparison.current.total_jobs == 0
        assert stats.monthly_comparison.current.total_amount == 0.0
        assert stats.monthly_comparison.percentage_change == 0.0

    def test_top_companies_busiest_first(self, db_session, fleet, make_job, make_company, make_job_type):
        busy = make_job_type(title="Sand", company=make_company(name="Busy Gravel"))
        for day in (1, 2):
            make_job(busy, fleet["driver"], fleet["unit"], job_date=date(2025, 3, day))
        make_job(fleet["job_type"], fleet["driver"], fleet["unit"], job_date=date(2025, 3, 3))

        stats = dashboard_service.get_stats(db_session, year=2025, month=3)

        assert [c.name for c in stats.top_companies] == ["Busy Gravel", "Aggregate Co"]

    def test_invalid_month(self, db_session):
        with pytest.raises(HTTPException) as exc:
            dashboard_service.get_stats(db_session, year=2025, month=13)
        assert exc.value.status_code == 400


class TestQuickSearch:
    def test_companies_by_industry(self, db_session, make_company):
        make_company(name="North Quarry", industry="Aggregates")
        make_company(name="Paving Ltd", industry="Asphalt")

        found = company_service.search(db_session, "aggreg")

        assert [c.name for c in found] == ["North Quarry"]

    def test_jobs_by_driver_name_with_limit(self, db_session, season):
        found = job_service.search(db_session, "harjit", limit=2)

        assert [job.id for job in found] == [season[2].id, season[1].id]
