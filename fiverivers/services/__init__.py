from .auth import auth_service
from .company import company_service
from .dashboard import dashboard_service
from .dispatcher import dispatcher_service
from .driver import driver_service
from .invoice import invoice_service
from .job import job_service
from .job_type import job_type_service
from .unit import unit_service

__all__ = [
    "auth_service",
    "company_service",
    "dashboard_service",
    "dispatcher_service",
    "driver_service",
    "invoice_service",
    "job_service",
    "job_type_service",
    "unit_service",
]
