from typing import Optional
from pydantic import EmailStr, Field
from fiverivers.schemas.common import CamelModel, Timestamped

class DriverBase(CamelModel):
    name: str
    description: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    hourly_rate: float = Field(0, ge=0)

class DriverCreate(DriverBase):
    pass

class DriverUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)

class DriverResponse(DriverBase, Timestamped):
    id: int

class DriverListItem(DriverResponse):
    active_jobs_count: int = 0


class DriverRateCreate(CamelModel):
    job_type_id: int
    hourly_rate: Optional[float] = Field(None, ge=0)
    percentage_rate: Optional[float] = Field(None, ge=0, le=100)

class DriverRateResponse(DriverRateCreate, Timestamped):
    id: int
    driver_id: int
