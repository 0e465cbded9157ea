"""
Pydantic schemas for posts, comments and likes.
"""
from typing import Optional, List, Any
from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from medlink.schemas.common import ProfileType, Visibility
from medlink.schemas.profile import AuthorSummary


class PostCreate(BaseModel):
    """Schema for creating a new post."""
    content: str = Field(..., min_length=1, description="Post body")
    author_id: str = Field(..., description="ID of the post author")
    visibility: Visibility = Field(Visibility.PUBLIC, description="Who can see the post")
    image_url: Optional[str] = Field(None, description="Primary image URL")
    images: List[str] = Field(default_factory=list, description="Additional image URLs")


class PostRead(BaseModel):
    """Schema for post data as stored in the database."""
    id: str
    content: str
    author_id: str
    author_type: ProfileType = ProfileType.INDIVIDUAL
    visibility: Visibility = Visibility.PUBLIC
    image_url: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    created_at: datetime
    updated_at: datetime

    @field_validator("images", mode="before")
    def none_as_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    class Config:
        from_attributes = True


class PostWithAuthor(PostRead):
    """A post with its author's summary attached."""
    author: AuthorSummary


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""
    post_id: str
    author_id: str
    content: str = Field(..., min_length=1)


class CommentRead(BaseModel):
    id: str
    post_id: str
    author_id: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


class CommentWithAuthor(CommentRead):
    author: AuthorSummary
