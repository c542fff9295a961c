from typing import Optional
from fiverivers.schemas.common import CamelModel, Timestamped

class UnitBase(CamelModel):
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    plate_number: Optional[str] = None
    vin: Optional[str] = None

class UnitCreate(UnitBase):
    pass

class UnitUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    plate_number: Optional[str] = None
    vin: Optional[str] = None

class UnitResponse(UnitBase, Timestamped):
    id: int

class UnitListItem(UnitResponse):
    jobs_count: int = 0
