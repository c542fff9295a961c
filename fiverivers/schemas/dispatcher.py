from typing import Optional
from pydantic import EmailStr, Field
from fiverivers.schemas.common import CamelModel, Timestamped

class DispatcherBase(CamelModel):
    name: str
    description: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    commission_percent: float = Field(0, ge=0, le=100)

class DispatcherCreate(DispatcherBase):
    pass

class DispatcherUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    commission_percent: Optional[float] = Field(None, ge=0, le=100)

class DispatcherResponse(DispatcherBase, Timestamped):
    id: int

class DispatcherListItem(DispatcherResponse):
    jobs_count: int = 0
    invoices_count: int = 0
