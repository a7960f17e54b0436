"""
Company table.

Companies are identified by their handle (natural key). Jobs reference the
handle and are deleted together with their company.
"""

from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Company(Base):
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"), nullable=True)
    description = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)

    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
