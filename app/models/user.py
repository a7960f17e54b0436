"""
User and job application tables.

Users are identified by username (natural key), which is also the identity
carried in access tokens.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, CheckConstraint, false
from sqlalchemy.orm import relationship
from app.core.database import Base


class User(Base):
    """
    User account.

    is_admin grants access to every admin-only endpoint; everyone else may
    only act on their own account.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    # bcrypt hash, never returned by the API
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, CheckConstraint("email LIKE '%_@_%'"), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"


class Application(Base):
    """A user's application to a job."""
    __tablename__ = "applications"

    username = Column(String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)

    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id})>"
