from datetime import date
from typing import List, Optional

import strawberry


def set_fields(data) -> dict:
    """The fields of an input object that the client actually sent."""
    if data is None:
        return {}
    return {
        name: value for name, value in vars(data).items()
        if value is not strawberry.UNSET
    }


@strawberry.input
class CompanyInput:
    name: Optional[str] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    phone: Optional[str] = strawberry.UNSET
    website: Optional[str] = strawberry.UNSET
    industry: Optional[str] = strawberry.UNSET
    location: Optional[str] = strawberry.UNSET


@strawberry.input
class DriverInput:
    name: Optional[str] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    phone: Optional[str] = strawberry.UNSET
    hourly_rate: Optional[float] = strawberry.UNSET


@strawberry.input
class DispatcherInput:
    name: Optional[str] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    phone: Optional[str] = strawberry.UNSET
    commission_percent: Optional[float] = strawberry.UNSET


@strawberry.input
class UnitInput:
    name: Optional[str] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    color: Optional[str] = strawberry.UNSET
    plate_number: Optional[str] = strawberry.UNSET
    vin: Optional[str] = strawberry.UNSET


@strawberry.input
class JobTypeInput:
    title: Optional[str] = strawberry.UNSET
    start_location: Optional[str] = strawberry.UNSET
    end_location: Optional[str] = strawberry.UNSET
    dispatch_type: Optional[str] = strawberry.UNSET
    rate_of_job: Optional[float] = strawberry.UNSET
    company_id: Optional[int] = strawberry.UNSET


@strawberry.input
class JobInput:
    job_date: Optional[date] = strawberry.UNSET
    job_type_id: Optional[int] = strawberry.UNSET
    driver_id: Optional[int] = strawberry.UNSET
    unit_id: Optional[int] = strawberry.UNSET
    dispatcher_id: Optional[int] = strawberry.UNSET
    start_time: Optional[str] = strawberry.UNSET
    end_time: Optional[str] = strawberry.UNSET
    hours_of_job: Optional[float] = strawberry.UNSET
    weight: Optional[List[float]] = strawberry.UNSET
    loads: Optional[int] = strawberry.UNSET
    ticket_ids: Optional[List[str]] = strawberry.UNSET
    job_gross_amount: Optional[float] = strawberry.UNSET
    invoice_status: Optional[str] = strawberry.UNSET
    payment_received: Optional[bool] = strawberry.UNSET
    driver_paid: Optional[bool] = strawberry.UNSET


@strawberry.input
class InvoiceInput:
    invoice_date: date
    job_ids: List[int]
    invoice_number: Optional[str] = strawberry.UNSET
    billed_to: Optional[str] = strawberry.UNSET
    billed_email: Optional[str] = strawberry.UNSET
    dispatch_percent: Optional[float] = strawberry.UNSET


@strawberry.input
class JobFilter:
    date_start: Optional[date] = None
    date_end: Optional[date] = None
    dispatch_type: Optional[str] = None
    invoice_status: Optional[str] = None
    driver_id: Optional[int] = None
    unit_id: Optional[int] = None
