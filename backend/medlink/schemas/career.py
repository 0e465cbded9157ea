"""
Pydantic schemas for experience and education entries.
"""
from typing import Optional
from pydantic import BaseModel, Field
from datetime import date, datetime


class ExperienceBase(BaseModel):
    """Experience fields as sent by a client; the profile comes from the URL."""
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None
    specialization: Optional[str] = None


class ExperienceCreate(ExperienceBase):
    profile_id: str


class ExperienceRead(ExperienceCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EducationBase(BaseModel):
    school: str = Field(..., min_length=1)
    degree: str = Field(..., min_length=1)
    field: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None
    specialization: Optional[str] = None


class EducationCreate(EducationBase):
    profile_id: str


class EducationRead(EducationCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
