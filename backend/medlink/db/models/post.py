"""
Post, comment and like models.
"""
from sqlalchemy import Column, String, Integer, Text, ForeignKey, JSON, UniqueConstraint

from ..base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin


class Post(Base, UUIDMixin, TimestampMixin):
    """
    A feed post. Counters are maintained by the like/comment write paths.
    """
    __tablename__ = "posts"

    content = Column(Text, nullable=False)
    author_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    author_type = Column(String(32), default="individual", nullable=False)
    visibility = Column(String(32), default="public", nullable=False)
    image_url = Column(Text)
    images = Column(JSON, default=list)
    likes_count = Column(Integer, default=0, nullable=False)
    comments_count = Column(Integer, default=0, nullable=False)
    shares_count = Column(Integer, default=0, nullable=False)


class PostComment(Base, UUIDMixin, CreatedAtMixin):
    __tablename__ = "post_comments"

    post_id = Column(String(36), ForeignKey("posts.id"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)


class PostLike(Base, UUIDMixin, CreatedAtMixin):
    __tablename__ = "post_likes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
    )

    post_id = Column(String(36), ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
