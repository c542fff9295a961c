from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import relationship
from fiverivers.database import Base, TimestampMixin

class Driver(Base, TimestampMixin):
    __tablename__ = "driver"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(255), nullable=True)
    hourly_rate = Column(Float, nullable=False, default=0)

    jobs = relationship("Job", back_populates="driver", passive_deletes="all")
    driver_rates = relationship("DriverRate", back_populates="driver", cascade="all, delete-orphan")


class DriverRate(Base, TimestampMixin):
    __tablename__ = "driver_rate"

    id = Column(Integer, primary_key=True, index=True)
    driver_id = Column(Integer, ForeignKey("driver.id", ondelete="CASCADE"), nullable=False, index=True)
    job_type_id = Column(Integer, ForeignKey("job_type.id", ondelete="CASCADE"), nullable=False, index=True)
    hourly_rate = Column(Float, nullable=True)
    percentage_rate = Column(Float, nullable=True)

    driver = relationship("Driver", back_populates="driver_rates")
    job_type = relationship("JobType")
