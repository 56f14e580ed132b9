"""
Organization and membership models.

Users belong to organizations through ``Member`` rows, each carrying the
user's ``Role`` in that organization.
"""
from sqlalchemy import String, ForeignKey, Boolean, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, TimestampMixin, UlidPrimaryKeyMixin
from app.features.permissions.roles import Role


class Organization(Base, UlidPrimaryKeyMixin, TimestampMixin):
    """
    Tenant. Addressed by ``slug`` in URLs.

    When ``should_attach_users_by_domain`` is set, new accounts whose email
    domain equals ``domain`` join automatically as members.
    """
    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    domain: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    should_attach_users_by_domain: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    owner_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", lazy="selectin")  # type: ignore

    members: Mapped[list["Member"]] = relationship(
        "Member",
        back_populates="organization",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, slug={self.slug!r})>"


class Member(Base, UlidPrimaryKeyMixin):
    """Membership of a user in an organization."""
    __tablename__ = "members"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_members_organization_user"),
    )

    role: Mapped[Role] = mapped_column(SQLEnum(Role), default=Role.MEMBER, nullable=False)

    organization_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(
        "Organization",
        back_populates="members",
        lazy="selectin"
    )
    user: Mapped["User"] = relationship(  # type: ignore
        "User",
        back_populates="memberships",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, user_id={self.user_id}, org_id={self.organization_id}, role={self.role})>"
