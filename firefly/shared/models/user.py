"""
User Entity Model

Represents a person known to the platform. Users are provisioned by the
external identity provider; this table only mirrors the fields the content
layer needs for authorization (role and family membership).

Model Hierarchy:
================
    User
       ├── family (Family)                 - The family this user belongs to
       └── created_families (Family[])     - Families this user created (volunteers)

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ email            │ "volunteer@example.org"                                    │
│ first_name       │ "Sam"                                                      │
│ role             │ VOLUNTEER                                                  │
│ family_id        │ NULL                                                       │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, String, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.shared.models.base import Base, TimestampMixin
from firefly.shared.models.enums import UserRole


if TYPE_CHECKING:
    from firefly.shared.models.family import Family


class User(Base, TimestampMixin):
    """
    User model.

    Attributes:
        id: Unique identifier (UUID v4), same id the identity provider issues
        email: User's email address (unique)
        first_name: Given name
        last_name: Family name
        role: ADMIN, VOLUNTEER or MEMBER
        family_id: Family the user belongs to, if any

    Relationships:
        family: The family this user is a member of
        created_families: Families created by this user
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHORIZATION
    # ═══════════════════════════════════════════════════════════════════════════

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole),
        nullable=False,
        default=UserRole.MEMBER,
    )

    family_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("families.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    family: Mapped[Optional["Family"]] = relationship(
        "Family",
        back_populates="members",
        foreign_keys=[family_id],
    )

    created_families: Mapped[list["Family"]] = relationship(
        "Family",
        back_populates="creator",
        foreign_keys="Family.created_by_id",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def display_name(self) -> str:
        """First and last name, falling back to the email address."""
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, role={self.role})>"
