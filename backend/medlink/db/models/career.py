"""
Experience and education entries owned by a profile.
"""
from sqlalchemy import Column, String, Text, Boolean, Date, ForeignKey

from ..base import Base, TimestampMixin, UUIDMixin


class Experience(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "experiences"

    profile_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255))
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date)
    current = Column(Boolean, default=False, nullable=False)
    description = Column(Text)
    specialization = Column(String(255))


class Education(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "education"

    profile_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    school = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    field = Column(String(255))
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date)
    current = Column(Boolean, default=False, nullable=False)
    description = Column(Text)
    specialization = Column(String(255))
