"""Organization and User ORM models.

Organizations own projects, videos and templates. Users are stored for
ownership and auditing only; authentication happens outside this service.
"""

import enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from framebrew.models.base import Base, IDMixin, TimestampMixin

if TYPE_CHECKING:
    from framebrew.models.project import Project


class OrgPlan(str, enum.Enum):
    """Subscription plan of an organization."""

    FREE = "FREE"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"


class UserRole(str, enum.Enum):
    """Role of a user inside an organization."""

    USER = "USER"
    ADMIN = "ADMIN"
    OWNER = "OWNER"


class Organization(Base, IDMixin, TimestampMixin):
    """Tenant that owns all other records.

    Attributes:
        name: Display name
        plan: Subscription plan
        settings: Free-form organization settings (JSON)
        users: Members of the organization
        projects: Projects owned by the organization
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    plan: Mapped[OrgPlan] = mapped_column(String(20), nullable=False, default=OrgPlan.FREE)
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    # Relationships
    users: Mapped[list["User"]] = relationship(
        "User", back_populates="organization", passive_deletes=True
    )
    projects: Mapped[list["Project"]] = relationship(
        "Project", back_populates="organization", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name!r}, plan={self.plan})>"


class User(Base, IDMixin, TimestampMixin):
    """Member of an organization.

    Attributes:
        email: Unique login email
        name: Display name
        role: Role inside the organization
        org_id: Foreign key to organizations table
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[UserRole] = mapped_column(String(20), nullable=False, default=UserRole.USER)
    org_id: Mapped[str] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )

    organization: Mapped["Organization"] = relationship("Organization", back_populates="users")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r}, role={self.role})>"


__all__ = [
    "Organization",
    "OrgPlan",
    "User",
    "UserRole",
]
