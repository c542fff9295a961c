import enum
from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import relationship
from fiverivers.database import Base, TimestampMixin

class DispatchType(str, enum.Enum):
    hourly = "Hourly"
    load = "Load"
    tonnage = "Tonnage"
    fixed = "Fixed"

    @classmethod
    def parse(cls, value):
        """Match a stored dispatch type case-insensitively; legacy "loads" means Load."""
        if not value:
            return None
        normalized = value.strip().lower()
        if normalized == "loads":
            normalized = "load"
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None

class JobType(Base, TimestampMixin):
    __tablename__ = "job_type"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("company.id", ondelete="RESTRICT"), nullable=False, index=True)
    title = Column(String(255), nullable=False, index=True)
    start_location = Column(String(255), nullable=True)
    end_location = Column(String(255), nullable=True)
    dispatch_type = Column(String(50), nullable=True)
    rate_of_job = Column(Float, nullable=False, default=0)

    company = relationship("Company", back_populates="job_types")
    jobs = relationship("Job", back_populates="job_type", passive_deletes="all")

    @property
    def description(self):
        if self.start_location and self.end_location:
            return f"{self.start_location} to {self.end_location}"
        return self.title
