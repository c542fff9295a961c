import enum
from sqlalchemy import Column, Integer, String, Float, ForeignKey, Boolean, Date, JSON
from sqlalchemy.orm import relationship
from fiverivers.database import Base, TimestampMixin

class InvoiceStatus(str, enum.Enum):
    pending = "Pending"
    invoiced = "Invoiced"
    raised = "Raised"
    received = "Received"

class Job(Base, TimestampMixin):
    __tablename__ = "job"

    id = Column(Integer, primary_key=True, index=True)
    job_date = Column(Date, nullable=False, index=True)
    job_type_id = Column(Integer, ForeignKey("job_type.id", ondelete="RESTRICT"), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("driver.id", ondelete="RESTRICT"), nullable=False, index=True)
    unit_id = Column(Integer, ForeignKey("unit.id", ondelete="RESTRICT"), nullable=False, index=True)
    dispatcher_id = Column(Integer, ForeignKey("dispatcher.id", ondelete="RESTRICT"), nullable=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoice.id", ondelete="SET NULL"), nullable=True, index=True)
    invoice_status = Column(String(20), nullable=False, default=InvoiceStatus.pending.value)
    start_time = Column(String(10), nullable=True)  # HH:MM
    end_time = Column(String(10), nullable=True)  # HH:MM
    hours_of_job = Column(Float, nullable=True)
    weight = Column(JSON, nullable=True)  # list of tonnages
    loads = Column(Integer, nullable=True)
    ticket_ids = Column(JSON, nullable=True)  # list of ticket numbers
    job_gross_amount = Column(Float, nullable=True, default=0)
    payment_received = Column(Boolean, nullable=False, default=False)
    driver_paid = Column(Boolean, nullable=False, default=False)

    job_type = relationship("JobType", back_populates="jobs")
    driver = relationship("Driver", back_populates="jobs")
    unit = relationship("Unit", back_populates="jobs")
    dispatcher = relationship("Dispatcher", back_populates="jobs")
    invoice = relationship("Invoice", back_populates="jobs")
    invoice_lines = relationship("InvoiceLine", back_populates="job", passive_deletes=True)
