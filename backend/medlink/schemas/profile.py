"""
Pydantic schemas for profiles.
"""
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone

from medlink.schemas.common import ProfileType

PLACEHOLDER_EMAIL = "user@example.com"
PLACEHOLDER_SPECIALIZATION = ["General Medicine"]
UNKNOWN_AUTHOR_NAME = "Unknown User"


class ProfileRead(BaseModel):
    """Schema for profile data as stored in the database."""
    id: str = Field(..., description="Profile ID (shared with the auth user id)")
    email: Optional[str] = Field(None, description="Contact email")
    full_name: Optional[str] = Field(None, description="Full name")
    headline: Optional[str] = Field(None, description="Professional headline")
    bio: Optional[str] = Field(None, description="About section")
    location: Optional[str] = Field(None, description="Location")
    avatar_url: Optional[str] = Field(None, description="Avatar image URL")
    banner_url: Optional[str] = Field(None, description="Banner image URL")
    website: Optional[str] = Field(None, description="Website")
    phone: Optional[str] = Field(None, description="Phone number")
    specialization: List[str] = Field(default_factory=list, description="Medical specializations, in order")
    is_premium: bool = Field(False, description="Whether the member has premium")
    profile_views: int = Field(0, ge=0, description="Profile view counter")
    user_type: ProfileType = Field(ProfileType.INDIVIDUAL, description="Kind of account")
    profile_type: ProfileType = Field(ProfileType.INDIVIDUAL, description="Kind of profile")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @field_validator("specialization", mode="before")
    def none_as_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("is_premium", mode="before")
    def none_as_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("profile_views", mode="before")
    def none_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Schema for updating an existing profile. Only set fields are written."""
    full_name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    banner_url: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    specialization: Optional[List[str]] = None
    is_premium: Optional[bool] = None
    user_type: Optional[ProfileType] = None
    profile_type: Optional[ProfileType] = None


class AuthorSummary(BaseModel):
    """The slice of a profile attached to posts and comments."""
    id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    headline: Optional[str] = None
    email: Optional[str] = None

    class Config:
        from_attributes = True


def placeholder_profile(
    profile_id: str,
    *,
    email: str = PLACEHOLDER_EMAIL,
    full_name: str = "User",
    headline: str = "Healthcare Professional",
) -> ProfileRead:
    """
    Build a non-persisted profile with generic defaults, keeping the given id.

    Args:
        profile_id: The id the caller asked for
        email: Email to show
        full_name: Display name to show
        headline: Headline to show

    Returns:
        ProfileRead: Placeholder profile
    """
    now = datetime.now(timezone.utc)
    return ProfileRead(
        id=profile_id,
        email=email,
        full_name=full_name,
        headline=headline,
        bio="",
        location="",
        avatar_url="",
        banner_url="",
        website="",
        phone="",
        specialization=list(PLACEHOLDER_SPECIALIZATION),
        is_premium=False,
        profile_views=0,
        user_type=ProfileType.INDIVIDUAL,
        profile_type=ProfileType.INDIVIDUAL,
        created_at=now,
        updated_at=now,
    )


def missing_profile(profile_id: str) -> ProfileRead:
    """Placeholder for a reachable store that has no row for this id."""
    return placeholder_profile(
        profile_id,
        full_name="Healthcare Professional",
        headline="Medical Professional",
    )


def unknown_author(author_id: str) -> AuthorSummary:
    return AuthorSummary(id=author_id, full_name=UNKNOWN_AUTHOR_NAME, avatar_url="", headline="", email="")


def profile_update_data(obj_in: ProfileUpdate | Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalise an update payload to a dict of the fields actually provided.
    """
    if isinstance(obj_in, dict):
        obj_in = ProfileUpdate(**obj_in)
    elif not isinstance(obj_in, BaseModel):
        raise ValueError("obj_in must be a ProfileUpdate schema or a dict")
    data = obj_in.model_dump(exclude_unset=True)
    for key in ("user_type", "profile_type"):
        if data.get(key) is not None:
            data[key] = ProfileType(data[key]).value
    return data
