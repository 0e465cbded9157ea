"""
Pydantic schemas for institutions, jobs and events.
"""
from typing import Optional, List, Any
from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from medlink.schemas.profile import ProfileRead


def _none_as_empty_list(v: Any) -> Any:
    return [] if v is None else v


class InstitutionCreate(BaseModel):
    profile_id: Optional[str] = Field(None, description="Profile that manages the institution")
    name: str = Field(..., min_length=1)
    type: Optional[str] = Field(None, description="hospital, clinic, university, ...")
    description: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    specialties: List[str] = Field(default_factory=list)
    verified: bool = False


class InstitutionRead(InstitutionCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    @field_validator("specialties", mode="before")
    def none_as_empty_list(cls, v: Any) -> Any:
        return _none_as_empty_list(v)

    class Config:
        from_attributes = True


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    company_id: Optional[str] = Field(None, description="Institution offering the job")
    posted_by: Optional[str] = Field(None, description="Profile that posted the job")
    location: Optional[str] = None
    job_type: str = "full_time"
    experience_level: Optional[str] = None
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    requirements: List[str] = Field(default_factory=list)
    specializations: List[str] = Field(default_factory=list)
    application_deadline: Optional[datetime] = None
    status: str = "active"


class JobRead(JobCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    @field_validator("requirements", "specializations", mode="before")
    def none_as_empty_list(cls, v: Any) -> Any:
        return _none_as_empty_list(v)

    class Config:
        from_attributes = True


class JobWithCompany(JobRead):
    company: Optional[InstitutionRead] = None
    posted_by_user: Optional[ProfileRead] = None


class JobApplicationBase(BaseModel):
    applicant_id: str
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    status: str = "pending"


class JobApplicationCreate(JobApplicationBase):
    job_id: str


class JobApplicationRead(JobApplicationCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    organizer_id: str
    event_type: str = "conference"
    start_date: datetime
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    is_virtual: bool = False
    meeting_url: Optional[str] = None
    max_attendees: Optional[int] = Field(None, ge=1)
    registration_fee: Optional[int] = Field(None, ge=0)
    banner_url: Optional[str] = None
    specializations: List[str] = Field(default_factory=list)


class EventRead(EventCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    @field_validator("specializations", mode="before")
    def none_as_empty_list(cls, v: Any) -> Any:
        return _none_as_empty_list(v)

    class Config:
        from_attributes = True


class EventWithOrganizer(EventRead):
    organizer: Optional[ProfileRead] = None


class EventRegistrationBase(BaseModel):
    attendee_id: str
    status: str = "registered"


class EventRegistration(EventRegistrationBase):
    event_id: str


class EventAttendeeRead(EventRegistration):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True
