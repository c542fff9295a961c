from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from fiverivers.database import Base, TimestampMixin

class Company(Base, TimestampMixin):
    __tablename__ = "company"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    industry = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)

    job_types = relationship("JobType", back_populates="company", passive_deletes="all")
