from datetime import datetime
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base schema for the public API.

    Fields are declared in snake_case and exposed in camelCase, which is what
    the admin portal sends and expects. Either spelling is accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(CamelModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str


# Flat representations used when one entity is embedded in another.

class CompanySummary(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class DriverSummary(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    hourly_rate: float = 0


class DispatcherSummary(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    commission_percent: float = 0


class UnitSummary(CamelModel):
    id: int
    name: str
    plate_number: Optional[str] = None


class JobTypeSummary(CamelModel):
    id: int
    title: str
    start_location: Optional[str] = None
    end_location: Optional[str] = None
    dispatch_type: Optional[str] = None
    rate_of_job: float = 0
    company_id: int


class InvoiceSummary(CamelModel):
    id: int
    invoice_number: str
    status: str
    total: float


class Timestamped(CamelModel):
    created_at: datetime
    updated_at: datetime
