"""
GraphQL object types.

Each type is built from an ORM instance with ``from_model`` and keeps that
instance privately, so relationship fields are answered by walking the ORM
associations instead of issuing hand-written queries.
"""
import dataclasses
from datetime import date, datetime
from typing import List, Optional

import strawberry
from sqlalchemy import inspect as sa_inspect


def _column_values(cls, obj) -> dict:
    columns = {attr.key for attr in sa_inspect(obj).mapper.column_attrs}
    return {
        field.name: getattr(obj, field.name)
        for field in dataclasses.fields(cls)
        if field.name in columns
    }


class FromModel:
    @classmethod
    def from_model(cls, obj):
        if obj is None:
            return None
        return cls(instance=obj, **_column_values(cls, obj))

    @classmethod
    def from_models(cls, objs) -> list:
        return [cls.from_model(obj) for obj in objs]


def _window(items, limit: Optional[int], offset: Optional[int]):
    start = offset or 0
    return items[start:start + limit] if limit is not None else items[start:]


@strawberry.type(name="Company")
class CompanyNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    name: str
    description: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    website: Optional[str]
    industry: Optional[str]
    location: Optional[str]
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def job_types(self) -> List["JobTypeNode"]:
        return JobTypeNode.from_models(self.instance.job_types)


@strawberry.type(name="JobType")
class JobTypeNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    title: str
    start_location: Optional[str]
    end_location: Optional[str]
    dispatch_type: Optional[str]
    rate_of_job: float
    company_id: int
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def company(self) -> Optional[CompanyNode]:
        return CompanyNode.from_model(self.instance.company)

    @strawberry.field
    def jobs(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List["JobNode"]:
        return JobNode.from_models(_window(self.instance.jobs, limit, offset))


@strawberry.type(name="DriverRate")
class DriverRateNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    driver_id: int
    job_type_id: int
    hourly_rate: Optional[float]
    percentage_rate: Optional[float]

    @strawberry.field
    def job_type(self) -> Optional[JobTypeNode]:
        return JobTypeNode.from_model(self.instance.job_type)


@strawberry.type(name="Driver")
class DriverNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    name: str
    description: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    hourly_rate: float
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def jobs(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List["JobNode"]:
        return JobNode.from_models(_window(self.instance.jobs, limit, offset))

    @strawberry.field
    def driver_rates(self) -> List[DriverRateNode]:
        return DriverRateNode.from_models(self.instance.driver_rates)


@strawberry.type(name="Unit")
class UnitNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    name: str
    description: Optional[str]
    color: Optional[str]
    plate_number: Optional[str]
    vin: Optional[str]
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def jobs(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List["JobNode"]:
        return JobNode.from_models(_window(self.instance.jobs, limit, offset))


@strawberry.type(name="Dispatcher")
class DispatcherNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    name: str
    description: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    commission_percent: float
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def jobs(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List["JobNode"]:
        return JobNode.from_models(_window(self.instance.jobs, limit, offset))

    @strawberry.field
    def invoices(self) -> List["InvoiceNode"]:
        return InvoiceNode.from_models(self.instance.invoices)


@strawberry.type(name="Job")
class JobNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    job_date: date
    job_type_id: int
    driver_id: int
    unit_id: int
    dispatcher_id: Optional[int]
    invoice_id: Optional[int]
    invoice_status: str
    start_time: Optional[str]
    end_time: Optional[str]
    hours_of_job: Optional[float]
    weight: Optional[List[float]]
    loads: Optional[int]
    ticket_ids: Optional[List[str]]
    job_gross_amount: Optional[float]
    payment_received: bool
    driver_paid: bool
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def job_type(self) -> Optional[JobTypeNode]:
        return JobTypeNode.from_model(self.instance.job_type)

    @strawberry.field
    def driver(self) -> Optional[DriverNode]:
        return DriverNode.from_model(self.instance.driver)

    @strawberry.field
    def unit(self) -> Optional[UnitNode]:
        return UnitNode.from_model(self.instance.unit)

    @strawberry.field
    def dispatcher(self) -> Optional[DispatcherNode]:
        return DispatcherNode.from_model(self.instance.dispatcher)

    @strawberry.field
    def invoice(self) -> Optional["InvoiceNode"]:
        return InvoiceNode.from_model(self.instance.invoice)


@strawberry.type(name="InvoiceLine")
class InvoiceLineNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    invoice_id: int
    job_id: Optional[int]
    line_amount: float

    @strawberry.field
    def job(self) -> Optional[JobNode]:
        return JobNode.from_model(self.instance.job)


@strawberry.type(name="Invoice")
class InvoiceNode(FromModel):
    instance: strawberry.Private[object]
    id: int
    invoice_number: str
    invoice_date: date
    dispatcher_id: int
    status: str
    sub_total: float
    dispatch_percent: float
    commission: float
    hst: float
    total: float
    billed_to: Optional[str]
    billed_email: Optional[str]
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def dispatcher(self) -> Optional[DispatcherNode]:
        return DispatcherNode.from_model(self.instance.dispatcher)

    @strawberry.field
    def jobs(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[JobNode]:
        return JobNode.from_models(_window(self.instance.jobs, limit, offset))

    @strawberry.field
    def lines(self) -> List[InvoiceLineNode]:
        return InvoiceLineNode.from_models(self.instance.lines)


@strawberry.type(name="MonthlyStats")
class MonthlyStatsNode:
    total_jobs: int
    total_dispatchers: int
    total_drivers: int
    total_invoices: int
    total_amount: float
    average_job_value: float

    @classmethod
    def from_stats(cls, stats):
        return cls(**{f.name: getattr(stats, f.name) for f in dataclasses.fields(cls)})


@strawberry.type(name="OverallStats")
class OverallStatsNode(MonthlyStatsNode):
    total_companies: int


@strawberry.type(name="MonthlyComparison")
class MonthlyComparisonNode:
    current: MonthlyStatsNode
    previous: MonthlyStatsNode
    percentage_change: float
    jobs_change: int
    amount_change: float


@strawberry.type(name="DashboardStats")
class DashboardStatsNode:
    instance: strawberry.Private[object]

    @strawberry.field
    def monthly_comparison(self) -> MonthlyComparisonNode:
        comparison = self.instance.monthly_comparison
        return MonthlyComparisonNode(
            current=MonthlyStatsNode.from_stats(comparison.current),
            previous=MonthlyStatsNode.from_stats(comparison.previous),
            percentage_change=comparison.percentage_change,
            jobs_change=comparison.jobs_change,
            amount_change=comparison.amount_change,
        )

    @strawberry.field
    def overall_stats(self) -> OverallStatsNode:
        return OverallStatsNode.from_stats(self.instance.overall_stats)

    @strawberry.field
    def recent_jobs(self) -> List[JobNode]:
        return JobNode.from_models(self.instance.recent_jobs)

    @strawberry.field
    def top_companies(self) -> List[CompanyNode]:
        return CompanyNode.from_models(self.instance.top_companies)
