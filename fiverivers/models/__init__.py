from .company import Company
from .dispatcher import Dispatcher
from .driver import Driver, DriverRate
from .invoice import Invoice, InvoiceLine
from .job import Job
from .job_type import JobType
from .unit import Unit
from .user import User
