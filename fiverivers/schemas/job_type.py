from typing import Optional
from pydantic import Field
from fiverivers.schemas.common import CamelModel, CompanySummary, Timestamped

class JobTypeBase(CamelModel):
    title: str
    start_location: Optional[str] = None
    end_location: Optional[str] = None
    dispatch_type: Optional[str] = None
    rate_of_job: float = Field(0, ge=0)
    company_id: int

class JobTypeCreate(JobTypeBase):
    pass

class JobTypeUpdate(CamelModel):
    title: Optional[str] = None
    start_location: Optional[str] = None
    end_location: Optional[str] = None
    dispatch_type: Optional[str] = None
    rate_of_job: Optional[float] = Field(None, ge=0)
    company_id: Optional[int] = None

class JobTypeResponse(JobTypeBase, Timestamped):
    id: int
    company: Optional[CompanySummary] = None
