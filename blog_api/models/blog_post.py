"""
Blog API: BlogPost SQLAlchemy Model
=====================================

What:  ORM model representing the `blog_posts` table.
How:   Inherits from the shared DeclarativeBase; `Database.connect()` creates
       the table from this mapping if it does not exist yet.
Who:   Used by BlogPostService for every persistence operation.

Table Design:
    - id: UUID assigned at insert, never changed afterwards
    - title / content / author: required text, NOT NULL at the store level too
    - created: timezone-aware insert timestamp (UTC)

Generic `Uuid` and `DateTime(timezone=True)` types are used so the same
mapping runs on PostgreSQL (asyncpg) and SQLite (aiosqlite).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


class BlogPost(Base):
    """
    A single blog post.

    Lifecycle:
        1. Inserted by POST /posts with all three required fields
        2. Individual fields overwritten by PUT /posts/{id}
        3. Removed by DELETE /posts/{id} (hard delete, no versioning)
    """

    __tablename__ = "blog_posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)

    # All storage in UTC; clients convert to local time
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id}, title='{self.title}', author='{self.author}')>"
