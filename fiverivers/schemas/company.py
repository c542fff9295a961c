from typing import List, Optional
from pydantic import EmailStr
from fiverivers.schemas.common import CamelModel, JobTypeSummary, Timestamped

class CompanyBase(CamelModel):
    name: str
    description: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None

class CompanyCreate(CompanyBase):
    pass

class CompanyUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None

class CompanyResponse(CompanyBase, Timestamped):
    id: int
    job_types: List[JobTypeSummary] = []
