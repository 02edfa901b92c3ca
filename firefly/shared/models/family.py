"""
Family Entity Model

A care circle: the patient's family members plus the volunteer who set it up.
FAMILY-visibility content is readable by every member, and a volunteer may
only assign tasks to members of families they created.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from firefly.shared.models.user import User


class Family(Base, TimestampMixin):
    """
    Family model.

    Attributes:
        id: Unique identifier (UUID v4)
        name: Display name of the family
        description: Optional free text
        created_by_id: User (usually a volunteer) who created the family

    Relationships:
        members: Users whose family_id points here
        creator: The user who created the family
    """

    __tablename__ = "families"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # users.family_id and families.created_by_id reference each other;
    # use_alter lets the schema be created in either order
    created_by_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey(
            "users.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_families_created_by_id_users",
        ),
        nullable=True,
        index=True,
    )

    members: Mapped[list["User"]] = relationship(
        "User",
        back_populates="family",
        foreign_keys="User.family_id",
    )

    creator: Mapped[Optional["User"]] = relationship(
        "User",
        back_populates="created_families",
        foreign_keys=[created_by_id],
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Family(id={self.id}, name={self.name})>"
