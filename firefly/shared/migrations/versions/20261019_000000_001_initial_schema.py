# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00

Tables created:
- families / users: Care families and their members (circular FKs)
- categories / tags: Structured taxonomy
- documents: Document metadata (files live in the document service)
- content: Unified NOTE/RESOURCE table (single-table inheritance)
- content_tags / content_structured_tags: Free-form and taxonomy tags
- content_assignments: Tasks on notes
- content_ratings: One rating per user per resource
- content_documents: Attached documents
- content_shares: Explicit shares / share tracking

Enums created:
- userrole, contenttype, visibility, notetype, resourcetype,
  resourcestatus, assignmentstatus, assignmentpriority
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUMS = {
    "userrole": ("ADMIN", "VOLUNTEER", "MEMBER"),
    "contenttype": ("NOTE", "RESOURCE"),
    "visibility": ("PRIVATE", "FAMILY", "SHARED", "PUBLIC"),
    "notetype": ("TEXT", "CHECKLIST", "JOURNAL", "MEETING", "CARE_PLAN", "RESOURCE", "PERSONAL"),
    "resourcetype": (
        "ARTICLE", "VIDEO", "AUDIO", "DOCUMENT", "LINK", "IMAGE", "TOOL", "CONTACT", "SERVICE",
    ),
    "resourcestatus": ("DRAFT", "PENDING", "APPROVED", "FEATURED", "REJECTED"),
    "assignmentstatus": ("ASSIGNED", "IN_PROGRESS", "COMPLETED", "CANCELLED"),
    "assignmentpriority": ("LOW", "MEDIUM", "HIGH", "URGENT"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _uuid() -> postgresql.UUID:
    return postgresql.UUID(as_uuid=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    for name, values in ENUMS.items():
        quoted = ", ".join(f"'{value}'" for value in values)
        op.execute(f"CREATE TYPE {name} AS ENUM ({quoted})")

    # families.created_by_id → users is added after users exists
    op.create_table(
        "families",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by_id", _uuid(), nullable=True, index=True),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("role", _enum("userrole"), nullable=False),
        sa.Column(
            "family_id",
            _uuid(),
            sa.ForeignKey("families.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        *_timestamps(),
    )

    op.create_foreign_key(
        "fk_families_created_by_id_users",
        "families",
        "users",
        ["created_by_id"],
        ["id"],
        ondelete="SET NULL",
    )

    op.create_table(
        "categories",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column("icon", sa.String(50), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "tags",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, index=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column(
            "category_id",
            _uuid(),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )

    op.create_table(
        "documents",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        sa.Column("mime_type", sa.String(100), nullable=True),
        sa.Column("type", sa.String(50), nullable=True),
        sa.Column("file_path", sa.Text(), nullable=True),
        sa.Column(
            "uploaded_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )

    # Unified content: common columns, then NOTE-only, then RESOURCE-only
    op.create_table(
        "content",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("content_type", _enum("contenttype"), nullable=False, index=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column(
            "category_id",
            _uuid(),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "family_id",
            _uuid(),
            sa.ForeignKey("families.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "created_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("visibility", _enum("visibility"), nullable=False, index=True),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("has_assignments", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("has_curation", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("has_ratings", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("has_sharing", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column(
            "is_deleted",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
            index=True,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        # NOTE
        sa.Column("note_type", _enum("notetype"), nullable=True),
        sa.Column("is_pinned", sa.Boolean(), nullable=True),
        sa.Column("allow_comments", sa.Boolean(), nullable=True),
        sa.Column("allow_editing", sa.Boolean(), nullable=True),
        sa.Column(
            "last_edited_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("last_edited_at", sa.DateTime(timezone=True), nullable=True),
        # RESOURCE
        sa.Column("resource_type", _enum("resourcetype"), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("target_audience", postgresql.JSONB(), nullable=True),
        sa.Column("external_meta", postgresql.JSONB(), nullable=True),
        sa.Column("status", _enum("resourcestatus"), nullable=True, index=True),
        sa.Column(
            "submitted_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "approved_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "featured_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("featured_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("rating_count", sa.Integer(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=True),
        sa.Column("last_verified_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "content_tags",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "content_id",
            _uuid(),
            sa.ForeignKey("content.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(100), nullable=False, index=True),
        sa.UniqueConstraint("content_id", "name", name="uq_content_tags_content_name"),
    )

    op.create_table(
        "content_structured_tags",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "content_id",
            _uuid(),
            sa.ForeignKey("content.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "tag_id",
            _uuid(),
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.UniqueConstraint("content_id", "tag_id", name="uq_content_structured_tags"),
    )

    op.create_table(
        "content_assignments",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "content_id",
            _uuid(),
            sa.ForeignKey("content.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "assigned_to",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "assigned_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", _enum("assignmentstatus"), nullable=False, index=True),
        sa.Column("priority", _enum("assignmentpriority"), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "completed_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("completion_notes", sa.Text(), nullable=True),
        sa.Column("estimated_minutes", sa.Integer(), nullable=True),
        sa.Column("tags", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        *_timestamps(),
    )

    op.create_table(
        "content_ratings",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "content_id",
            _uuid(),
            sa.ForeignKey("content.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "user_id",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("review", sa.Text(), nullable=True),
        sa.Column("is_helpful", sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("content_id", "user_id", name="uq_content_ratings_content_user"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_content_ratings_range"),
    )

    op.create_table(
        "content_documents",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "content_id",
            _uuid(),
            sa.ForeignKey("content.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "document_id",
            _uuid(),
            sa.ForeignKey("documents.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "created_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_main", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )

    op.create_table(
        "content_shares",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "content_id",
            _uuid(),
            sa.ForeignKey("content.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "user_id",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "shared_by",
            _uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("can_edit", sa.Boolean(), nullable=True),
        sa.Column("can_comment", sa.Boolean(), nullable=True),
        sa.Column("can_share", sa.Boolean(), nullable=True),
        sa.Column("share_method", sa.String(50), nullable=True),
        sa.Column("share_data", postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    for table in (
        "content_shares",
        "content_documents",
        "content_ratings",
        "content_assignments",
        "content_structured_tags",
        "content_tags",
        "content",
        "documents",
        "tags",
        "categories",
    ):
        op.drop_table(table)

    op.drop_constraint("fk_families_created_by_id_users", "families", type_="foreignkey")
    op.drop_table("users")
    op.drop_table("families")

    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
