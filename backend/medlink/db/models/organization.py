"""
Institution, job and event models, with their application/attendance rows.
"""
from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, ForeignKey, JSON

from ..base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin


class Institution(Base, UUIDMixin, TimestampMixin):
    """
    Hospital, clinic, university or other organisation, owned by a profile.
    """
    __tablename__ = "institutions"

    profile_id = Column(String(36), ForeignKey("profiles.id"), index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(64))
    description = Column(Text)
    location = Column(String(255))
    website = Column(Text)
    logo_url = Column(Text)
    banner_url = Column(Text)
    specialties = Column(JSON, default=list)
    verified = Column(Boolean, default=False, nullable=False)


class Job(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "jobs"

    title = Column(String(255), nullable=False)
    description = Column(Text)
    company_id = Column(String(36), ForeignKey("institutions.id"), index=True)
    posted_by = Column(String(36), ForeignKey("profiles.id"), index=True)
    location = Column(String(255))
    job_type = Column(String(32), default="full_time", nullable=False)
    experience_level = Column(String(32))
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    requirements = Column(JSON, default=list)
    specializations = Column(JSON, default=list)
    application_deadline = Column(DateTime(timezone=True))
    status = Column(String(32), default="active", nullable=False)


class JobApplication(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "job_applications"

    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False, index=True)
    applicant_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    cover_letter = Column(Text)
    resume_url = Column(Text)
    status = Column(String(32), default="pending", nullable=False)


class Event(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "events"

    title = Column(String(255), nullable=False)
    description = Column(Text)
    organizer_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    event_type = Column(String(32), default="conference", nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False, index=True)
    end_date = Column(DateTime(timezone=True))
    location = Column(String(255))
    is_virtual = Column(Boolean, default=False, nullable=False)
    meeting_url = Column(Text)
    max_attendees = Column(Integer)
    registration_fee = Column(Integer)
    banner_url = Column(Text)
    specializations = Column(JSON, default=list)


class EventAttendee(Base, UUIDMixin, CreatedAtMixin):
    __tablename__ = "event_attendees"

    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    attendee_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    status = Column(String(32), default="registered", nullable=False)
