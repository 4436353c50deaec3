"""
SocialNet Backend — Post SQLAlchemy Model
===========================================

What:  ORM model representing the `posts` table.
Who:   Used by PostService for feed queries, creation and likes.

Author details (name, location, picture) are copied from the user at creation
time, so the feed renders without a join.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import TIMESTAMP, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from socialnet.database import Base
from socialnet.models.user import JSONType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """A status update, optionally with a picture, shown in the feed."""

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Author id stored as the string form used throughout the API
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    picture_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    user_picture_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # What: user id → True for each user who liked the post
    likes: Mapped[Dict[str, bool]] = mapped_column(JSONType, nullable=False, default=dict)
    comments: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Feed queries: newest first, optionally filtered by author
    __table_args__ = (
        Index("idx_posts_created_at", created_at.desc()),
        Index("idx_posts_user_id", user_id),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id='{self.user_id}')>"
