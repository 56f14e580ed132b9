"""
Invite model: a pending offer for an email address to join an organization.
"""
from datetime import datetime
from sqlalchemy import String, ForeignKey, UniqueConstraint, DateTime, Enum as SQLEnum, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, UlidPrimaryKeyMixin
from app.features.permissions.roles import Role


class Invite(Base, UlidPrimaryKeyMixin):
    """
    Invite addressed to ``email`` with the role granted on acceptance.

    ``author_id`` is the ownership attribute checked by member-scoped rules.
    """
    __tablename__ = "invites"
    __table_args__ = (
        UniqueConstraint("email", "organization_id", name="uq_invites_email_organization"),
    )

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    role: Mapped[Role] = mapped_column(SQLEnum(Role), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    author_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )
    organization_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationships
    author: Mapped["User"] = relationship("User", lazy="selectin")  # type: ignore
    organization: Mapped["Organization"] = relationship("Organization", lazy="selectin")  # type: ignore

    def __repr__(self) -> str:
        return f"<Invite(id={self.id}, email={self.email!r}, org_id={self.organization_id})>"
