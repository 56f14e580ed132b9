"""
User model with ULID primary keys.
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, TimestampMixin, UlidPrimaryKeyMixin


class User(Base, UlidPrimaryKeyMixin, TimestampMixin):
    """
    User account.

    ``password_hash`` is null for accounts that never set a password.
    """
    __tablename__ = "users"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Relationships
    memberships: Mapped[list["Member"]] = relationship(  # type: ignore
        "Member",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
