"""
SQLAlchemy declarative base, ULID keys and timestamp columns shared by all models.
"""
from datetime import datetime
from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from ulid import ULID


def generate_ulid() -> str:
    """Generate a new ULID string."""
    return str(ULID())


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Usage:
        from app.core.database.base import Base, UlidPrimaryKeyMixin

        class Invite(Base, UlidPrimaryKeyMixin):
            __tablename__ = "invites"
            email: Mapped[str] = mapped_column(String(255))
    """
    pass


class UlidPrimaryKeyMixin:
    """ULID (Universally Unique Lexicographically Sortable Identifier) string primary key."""
    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)


class TimestampMixin:
    """
    Mixin to add created_at and updated_at timestamps to models.
    """
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
