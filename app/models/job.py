from sqlalchemy import Column, Integer, Numeric, Text, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Job(Base):
    """
    Job posting belonging to a company.

    equity is a fraction between 0 and 1; a job "has equity" when it is > 0.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False, index=True)
    salary = Column(Integer, CheckConstraint("salary >= 0"), nullable=True)
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"), nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    company = relationship("Company", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"
