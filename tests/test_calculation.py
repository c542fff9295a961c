"""
Unit tests for job pricing and invoice arithmetic.
"""

from datetime import date

import pytest

from fiverivers.services.calculation import (
    calculate_invoice_totals,
    calculate_job_gross_amount,
    format_quantity,
    generate_invoice_number,
    job_hours,
    total_weight,
)
from fiverivers.services.invoice import month_range


class TestJobHours:
    def test_same_day_shift(self):
        assert job_hours("08:00", "16:30") == 8.5

    def test_overnight_shift_wraps_midnight(self):
        assert job_hours("22:00", "02:00") == 4.0

    def test_falls_back_to_stored_hours(self):
        assert job_hours(None, "16:00", fallback=6.5) == 6.5
        assert job_hours("bad", "16:00", fallback=3) == 3

    def test_equal_times_use_stored_hours(self):
        assert job_hours("07:00", "07:00", fallback=24) == 24
        assert job_hours("07:00", "07:00") is None

    def test_weights_skip_garbage(self):
        assert total_weight([10.5, "4.5", None, "x"]) == 15.0
        assert total_weight(None) == 0.0


class TestGrossAmount:
    def test_hourly_uses_clock_times(self):
        assert calculate_job_gross_amount("Hourly", 100, start_time="08:00", end_time="16:30") == 850.0

    def test_hourly_without_times_uses_hours_of_job(self):
        assert calculate_job_gross_amount("hourly", 95, hours_of_job=10) == 950.0

    def test_load_and_legacy_loads_spelling(self):
        assert calculate_job_gross_amount("Load", 50, loads=3) == 150.0
        assert calculate_job_gross_amount("loads", 50, loads=3) == 150.0

    def test_tonnage_sums_weights(self):
        assert calculate_job_gross_amount("Tonnage", 12.5, weight=[10.2, 20.3]) == 381.25

    def test_fixed_and_unknown_bill_rate_once(self):
        assert calculate_job_gross_amount("Fixed", 500) == 500.0
        assert calculate_job_gross_amount("Something else", 75) == 75.0
        assert calculate_job_gross_amount(None, 75) == 75.0

    def test_rounded_to_cents(self):
        assert calculate_job_gross_amount("Hourly", 33.333, hours_of_job=1) == 33.33

    @pytest.mark.parametrize("dispatch_type,quantities,expected", [
        ("Hourly", {"hours_of_job": 8}, "8.00"),
        ("Tonnage", {"weight": [1.25, 2]}, "3.25"),
        ("Load", {"loads": 4}, "4"),
        ("Fixed", {}, "1"),
        ("Load", {"loads": 0}, ""),
    ])
    def test_quantity_column(self, dispatch_type, quantities, expected):
        assert format_quantity(dispatch_type, **quantities) == expected


class TestInvoiceTotals:
    def test_commission_is_added_before_hst(self):
        totals = calculate_invoice_totals([1000, 500], 5)
        assert totals.sub_total == 1500.0
        assert totals.commission == 75.0
        assert totals.hst == 204.75
        assert totals.total == 1779.75

    def test_missing_amounts_and_percent_count_as_zero(self):
        totals = calculate_invoice_totals([None, 200], None)
        assert totals.sub_total == 200.0
        assert totals.dispatch_percent == 0
        assert totals.commission == 0
        assert totals.total == 226.0

    def test_custom_hst_rate(self):
        assert calculate_invoice_totals([100], 0, hst_rate=0.05).total == 105.0


class TestInvoiceNumber:
    def test_single_unit_uses_its_digits(self):
        number = generate_invoice_number(
            "Gurpreet Singh",
            ["Truck 12", "Truck 12"],
            [date(2025, 1, 15), date(2025, 1, 3)],
        )
        assert number == "INV-GS-12-250103-250115"

    def test_several_units_are_mul(self):
        number = generate_invoice_number("Ace Dispatch Ltd", ["T1", "T2"], [date(2025, 2, 1)])
        assert number == "INV-ADL-MUL-250201-250201"

    def test_unit_without_digits_is_mul(self):
        assert generate_invoice_number("Bo", ["Blue"], [date(2025, 2, 1)]).startswith("INV-B-MUL-")


class TestMonthRange:
    def test_month_and_year(self):
        assert month_range(2, 2025) == (date(2025, 2, 1), date(2025, 3, 1))

    def test_december_rolls_into_next_year(self):
        assert month_range(12, 2024) == (date(2024, 12, 1), date(2025, 1, 1))

    def test_year_only(self):
        assert month_range(None, 2025) == (date(2025, 1, 1), date(2026, 1, 1))

    def test_nothing(self):
        assert month_range(None, None) == (None, None)
