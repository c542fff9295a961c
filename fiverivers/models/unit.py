from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from fiverivers.database import Base, TimestampMixin

class Unit(Base, TimestampMixin):
    __tablename__ = "unit"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(255), nullable=True)
    color = Column(String(50), nullable=True)
    plate_number = Column(String(50), nullable=True)
    vin = Column(String(50), nullable=True)

    jobs = relationship("Job", back_populates="unit", passive_deletes="all")
