"""
Pricing rules for jobs and invoices.

A job is priced from its job type: hourly jobs bill the worked hours, load
jobs the number of loads, tonnage jobs the summed ticket weights and fixed
jobs a flat rate. Invoice totals are derived from the gross amounts of the
attached jobs, the dispatcher's commission and HST.
"""
import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from fiverivers.core.config import settings
from fiverivers.models.job_type import DispatchType

MINUTES_PER_DAY = 24 * 60


def round_money(value: float) -> float:
    return round(float(value or 0), 2)


def _minutes(clock: str) -> Optional[int]:
    parts = clock.split(":")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except (IndexError, ValueError):
        return None
    return hours * 60 + minutes


def job_hours(
    start_time: Optional[str],
    end_time: Optional[str],
    fallback: Optional[float] = None
) -> Optional[float]:
    """
    Hours worked between two ``HH:MM`` clock times.

    An end time earlier than the start time is an overnight shift. Without
    two distinct times the stored ``fallback`` hours are used.
    """
    if start_time and end_time:
        start, end = _minutes(start_time), _minutes(end_time)
        if start is not None and end is not None and start != end:
            if end < start:
                end += MINUTES_PER_DAY
            return (end - start) / 60
    return fallback


def total_weight(weight: Optional[Iterable]) -> float:
    total = 0.0
    for value in weight or []:
        try:
            total += float(value)
        except (TypeError, ValueError):
            continue
    return total


def job_quantity(
    dispatch_type: Optional[str],
    *,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    hours_of_job: Optional[float] = None,
    loads: Optional[int] = None,
    weight: Optional[Sequence[float]] = None
) -> Optional[float]:
    """
    The billed quantity of a job: hours, loads, tonnes or 1 for fixed jobs.

    Returns None when the job type has no recognised dispatch type.
    """
    kind = DispatchType.parse(dispatch_type)
    if kind is DispatchType.hourly:
        return job_hours(start_time, end_time, hours_of_job) or 0.0
    if kind is DispatchType.load:
        return float(loads or 0)
    if kind is DispatchType.tonnage:
        return total_weight(weight)
    if kind is DispatchType.fixed:
        return 1.0
    return None


def calculate_job_gross_amount(
    dispatch_type: Optional[str],
    rate: Optional[float],
    **quantities
) -> float:
    """
    Gross amount billed for a job.

    Unknown dispatch types bill the job type's rate once, like fixed jobs.
    """
    quantity = job_quantity(dispatch_type, **quantities)
    if quantity is None:
        quantity = 1.0
    return round_money(max(0.0, quantity * (rate or 0)))


def format_quantity(dispatch_type: Optional[str], **quantities) -> str:
    """Render the HRS/TON/LOADS column of an invoice row."""
    kind = DispatchType.parse(dispatch_type)
    quantity = job_quantity(dispatch_type, **quantities)
    if not quantity:
        return ""
    if kind in (DispatchType.hourly, DispatchType.tonnage):
        return f"{quantity:.2f}"
    return str(int(quantity))


@dataclass
class InvoiceTotals:
    sub_total: float
    dispatch_percent: float
    commission: float
    hst: float
    total: float


def calculate_invoice_totals(
    amounts: Iterable[Optional[float]],
    dispatch_percent: Optional[float],
    hst_rate: Optional[float] = None
) -> InvoiceTotals:
    """
    Invoice totals from job gross amounts.

    ``commission = subtotal * percent / 100``, HST is charged on subtotal
    plus commission, and the total is the sum of all three.
    """
    if hst_rate is None:
        hst_rate = settings.HST_RATE
    percent = float(dispatch_percent or 0)
    sub_total = round_money(sum(amount or 0 for amount in amounts))
    commission = round_money(sub_total * percent / 100)
    hst = round_money((sub_total + commission) * hst_rate)
    total = round_money(sub_total + commission + hst)
    return InvoiceTotals(
        sub_total=sub_total,
        dispatch_percent=percent,
        commission=commission,
        hst=hst,
        total=total,
    )


def _initials(name: str) -> str:
    return "".join(part[0].upper() for part in name.split() if part)


def generate_invoice_number(
    dispatcher_name: str,
    unit_names: Iterable[Optional[str]],
    job_dates: Iterable[date]
) -> str:
    """
    Build ``INV-{initials}-{truck}-{first YYMMDD}-{last YYMMDD}``.

    The truck part is the digits of the unit name when every job used the
    same unit, otherwise ``MUL``.
    """
    units = {name for name in unit_names if name}
    truck = "MUL"
    if len(units) == 1:
        match = re.search(r"\d+", next(iter(units)))
        if match:
            truck = match.group(0)

    dates: List[date] = sorted(d for d in job_dates if d)
    first = dates[0].strftime("%y%m%d") if dates else ""
    last = dates[-1].strftime("%y%m%d") if dates else ""
    return f"INV-{_initials(dispatcher_name)}-{truck}-{first}-{last}"
