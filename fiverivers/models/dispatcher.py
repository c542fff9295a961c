from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import relationship
from fiverivers.database import Base, TimestampMixin

class Dispatcher(Base, TimestampMixin):
    __tablename__ = "dispatcher"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(255), nullable=True)
    commission_percent = Column(Float, nullable=False, default=0)

    jobs = relationship("Job", back_populates="dispatcher", passive_deletes="all")
    invoices = relationship("Invoice", back_populates="dispatcher", passive_deletes="all")
