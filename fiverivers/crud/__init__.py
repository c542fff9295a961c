from fiverivers.crud.base import CRUDBase
from .company import company
from .dispatcher import dispatcher
from .driver import driver, driver_rate
from .invoice import invoice
from .job import job
from .job_type import job_type
from .unit import unit
from .user import user

__all__ = [
    "CRUDBase",
    "company",
    "dispatcher",
    "driver",
    "driver_rate",
    "invoice",
    "job",
    "job_type",
    "unit",
    "user",
]
