import enum
from sqlalchemy import Column, Integer, String, Float, ForeignKey, Date
from sqlalchemy.orm import relationship
from fiverivers.database import Base, TimestampMixin

class InvoiceState(str, enum.Enum):
    pending = "Pending"
    raised = "Raised"
    received = "Received"

class Invoice(Base, TimestampMixin):
    __tablename__ = "invoice"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(255), nullable=False, unique=True, index=True)
    invoice_date = Column(Date, nullable=False)
    dispatcher_id = Column(Integer, ForeignKey("dispatcher.id", ondelete="RESTRICT"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=InvoiceState.pending.value)
    sub_total = Column(Float, nullable=False, default=0)
    dispatch_percent = Column(Float, nullable=False, default=0)
    commission = Column(Float, nullable=False, default=0)
    hst = Column(Float, nullable=False, default=0)
    total = Column(Float, nullable=False, default=0)
    billed_to = Column(String(255), nullable=True)
    billed_email = Column(String(255), nullable=True)

    dispatcher = relationship("Dispatcher", back_populates="invoices")
    lines = relationship("InvoiceLine", back_populates="invoice", cascade="all, delete-orphan")
    jobs = relationship("Job", back_populates="invoice", order_by="Job.job_date")


class InvoiceLine(Base, TimestampMixin):
    __tablename__ = "invoice_line"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoice.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("job.id", ondelete="SET NULL"), nullable=True, index=True)
    line_amount = Column(Float, nullable=False, default=0)

    invoice = relationship("Invoice", back_populates="lines")
    job = relationship("Job", back_populates="invoice_lines")
