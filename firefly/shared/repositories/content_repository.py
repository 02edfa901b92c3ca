"""
Content Repository

Data access for the unified content table: notes and resources, plus the
workflows attached to them.

What This Provides:
===================
CRUD & filtering
    create()                 → Permission check, defaults, insert
    find_by_id()             → Single record with optional relations, or None
    filter()                 → Paginated, visibility-gated search
    update() / delete()      → Partial update / soft delete
    increment_view_count()   → Atomic counter bump

Assignments (NOTE only)
    create_assignment()      → Hand a task to a user
    update_assignment_status()
    get_assigned_tasks()     → A user's tasks, most urgent first
    get_assignments_created_by() → Tasks a user handed out
    update_assignment() / delete_assignment() → Assigner revises or withdraws

Curation & ratings (RESOURCE only)
    get_curation_queue() / approve_content() / feature_content()
    rate_content()           → Upsert + re-aggregate

Attachments
    authorize_update() / authorize_share() → Checks run before attaching or sharing
    attach_document() / detach_document() / share_content()

Access Pattern:
===============
Every call that takes (actor_id, actor_role) resolves an Actor first, loads
the facts the policy needs (the row, the actor's share), then asks the pure
predicates in firefly.shared.policies. "Missing" and "not allowed to see"
are deliberately indistinguishable to the caller.

    actor  = await users.get_actor(actor_id, actor_role)
    row    = SELECT ... WHERE id = :id AND is_deleted = false
    share  = SELECT ... FROM content_shares WHERE content_id = :id AND user_id = :actor
    allowed = check_content_access(row, actor, share)

Loading:
========
Relations are never lazy-loaded (AsyncSession cannot do implicit IO).
Reads go through _fetch(), which eager-loads exactly what ContentOptions
asks for and refreshes rows already in the session.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
import math
from typing import Any, Callable, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, case, delete, exists, false, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from firefly.config.settings import settings
from firefly.shared.core.exceptions import (
    AssignmentNotFoundError,
    AuthorizationError,
    ContentNotFoundError,
    NotFoundError,
    PersistenceError,
    UserNotFoundError,
    ValidationError,
)
from firefly.shared.core.logging import get_logger
from firefly.shared.data.healthcare_tags import (
    HEALTHCARE_CATEGORIES,
    HealthcareCategory,
    expand_healthcare_categories,
)
from firefly.shared.models.base import utcnow
from firefly.shared.models.content import (
    NOTE_ONLY_FIELDS,
    RESOURCE_ONLY_FIELDS,
    Content,
    ContentStructuredTag,
    ContentTag,
    Note,
    Resource,
)
from firefly.shared.models.content_assignment import ContentAssignment
from firefly.shared.models.content_document import ContentDocument
from firefly.shared.models.content_rating import ContentRating
from firefly.shared.models.content_share import ContentShare
from firefly.shared.models.document import Document
from firefly.shared.models.enums import (
    AssignmentPriority,
    AssignmentStatus,
    ContentSortField,
    ContentType,
    NoteType,
    ResourceStatus,
    SortOrder,
    UserRole,
    Visibility,
)
from firefly.shared.policies.content_policy import (
    ALLOWED_ASSIGNMENT_TRANSITIONS,
    Actor,
    can_delete,
    can_manage_assignment,
    can_share_content,
    can_transition_assignment,
    can_update,
    can_update_assignment,
    check_content_access,
    ensure_can_assign,
    ensure_can_create,
    ensure_can_curate,
)
from firefly.shared.repositories.base import BaseRepository
from firefly.shared.repositories.user_repository import UserRepository
from firefly.shared.schemas.content import (
    AssignmentInput,
    AssignmentUpdate,
    ContentFilters,
    ContentOptions,
    CreateContentInput,
    SharePermissions,
    UpdateContentInput,
)


logger = get_logger(__name__)

# Variant columns live on the shared table. Filtering through the table
# columns keeps NOTE rows in results that also sort by a RESOURCE column.
_columns = Content.__table__.c

_PRIORITY_RANK = case(
    (ContentAssignment.priority == AssignmentPriority.URGENT, 4),
    (ContentAssignment.priority == AssignmentPriority.HIGH, 3),
    (ContentAssignment.priority == AssignmentPriority.MEDIUM, 2),
    (ContentAssignment.priority == AssignmentPriority.LOW, 1),
    else_=0,
)

# Most urgent first, then soonest due (undated last), then newest
_TASK_ORDER = (
    _PRIORITY_RANK.desc(),
    ContentAssignment.due_date.asc().nulls_last(),
    ContentAssignment.created_at.desc(),
)

_SORT_COLUMNS = {
    ContentSortField.CREATED_AT: _columns.created_at,
    ContentSortField.UPDATED_AT: _columns.updated_at,
    ContentSortField.TITLE: _columns.title,
    ContentSortField.VIEW_COUNT: _columns.view_count,
    ContentSortField.RATING: _columns.rating,
}

_REQUIRED_FIELDS = ("title", "visibility")

# Verification is a curation decision, like approving or featuring
_VERIFICATION_FIELDS = frozenset({"is_verified", "last_verified_at"})

_TWO_PLACES = Decimal("0.01")


def _escape_like(term: str) -> str:
    """Make LIKE wildcards in user input match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class PaginatedContent:
    """One page of filter() results."""

    content: list[Content]
    total: int
    page: int
    limit: int
    total_pages: int


class ContentRepository(BaseRepository[Content]):
    """
    Repository for unified NOTE/RESOURCE content.

    Args:
        session: Async database session
        healthcare_categories: Taxonomy used to expand category filters
        assignment_admin_override: Let admins move any assignment; defaults
            to the ASSIGNMENT_ADMIN_OVERRIDE setting
    """

    def __init__(
        self,
        session: AsyncSession,
        healthcare_categories: Sequence[HealthcareCategory] = HEALTHCARE_CATEGORIES,
        assignment_admin_override: Optional[bool] = None,
    ) -> None:
        super().__init__(Content, session)
        self.users = UserRepository(session)
        self.healthcare_categories = healthcare_categories
        self.assignment_admin_override = (
            settings.ASSIGNMENT_ADMIN_OVERRIDE
            if assignment_admin_override is None
            else assignment_admin_override
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        data: CreateContentInput,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> Content:
        """
        Create a NOTE or RESOURCE.

        Members may create notes but not resources. Resources created by an
        admin are approved immediately; everyone else's wait for curation.

        Returns:
            The new record with creator, family and category loaded

        Raises:
            AuthorizationError: Role may not create this content type
            ValidationError: Fields of the other variant were supplied
            PersistenceError: The insert failed
        """
        actor = await self.users.get_actor(actor_id, actor_role)
        try:
            ensure_can_create(data.content_type, actor)
        except AuthorizationError:
            logger.warning(
                "Content creation denied",
                actor_id=str(actor_id),
                role=actor_role.value,
                content_type=data.content_type.value,
            )
            raise

        self._validate_variant_fields(data.content_type, data.model_dump(exclude_none=True))

        values = self.prepare_content_data(data, actor)
        model = Note if data.content_type == ContentType.NOTE else Resource
        content = model(**values)
        content.replace_tags(data.tags)

        await self.add(content, label="content")

        logger.info(
            "Content created",
            content_id=str(content.id),
            content_type=data.content_type.value,
            created_by=str(actor_id),
            visibility=content.visibility.value,
        )

        return await self._fetch(
            content.id,
            ContentOptions(include_creator=True, include_family=True, include_category=True),
        )

    @staticmethod
    def prepare_content_data(data: CreateContentInput, actor: Actor) -> dict[str, Any]:
        """
        Column values for a new record, with per-type defaults applied.

        NOTE:     note_type TEXT, pinned/comments/editing off
        RESOURCE: APPROVED when an admin creates it, PENDING and queued for
                  curation otherwise; ratings enabled
        """
        values = data.model_dump(exclude={"content_type", "tags"}, exclude_none=True)
        values["created_by"] = actor.user_id
        values.setdefault("visibility", Visibility.PRIVATE)
        values.update(
            view_count=0,
            has_assignments=False,
            has_curation=False,
            has_ratings=False,
            has_sharing=False,
        )

        if data.content_type == ContentType.NOTE:
            values.setdefault("note_type", NoteType.TEXT)
            values.setdefault("is_pinned", False)
            values.setdefault("allow_comments", False)
            values.setdefault("allow_editing", False)
            return values

        values.setdefault("target_audience", [])
        values.update(
            submitted_by=actor.user_id,
            has_ratings=True,
            rating_count=0,
            is_verified=False,
        )
        if actor.is_admin:
            values.update(
                status=ResourceStatus.APPROVED,
                approved_by=actor.user_id,
                approved_at=utcnow(),
                has_curation=False,
            )
        else:
            values.update(status=ResourceStatus.PENDING, has_curation=True)
        return values

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def find_by_id(
        self,
        content_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
        options: Optional[ContentOptions] = None,
    ) -> Optional[Content]:
        """
        Get one record if it exists and the actor may see it.

        Soft-deleted records count as missing unless options.include_deleted.

        Returns:
            The record with the requested relations loaded, or None
        """
        actor = await self.users.get_actor(actor_id, actor_role)
        content, _ = await self._find_accessible(content_id, actor, options or ContentOptions())
        return content

    async def filter(
        self,
        filters: ContentFilters,
        actor_id: UUID,
        actor_role: UserRole,
        options: Optional[ContentOptions] = None,
    ) -> PaginatedContent:
        """
        Paginated search over content the actor can see.

        All filters are ANDed. Non-admins additionally only see their own,
        PUBLIC, their family's FAMILY and their SHARED content.

        Example:
            page = await repo.filter(
                ContentFilters(content_types=[ContentType.RESOURCE], featured=True),
                user_id,
                UserRole.MEMBER,
            )
            page.content, page.total, page.total_pages
        """
        actor = await self.users.get_actor(actor_id, actor_role)
        conditions = self._build_conditions(filters, actor)

        limit = min(filters.limit or settings.CONTENT_DEFAULT_PAGE_SIZE, settings.CONTENT_MAX_PAGE_SIZE)
        offset = (filters.page - 1) * limit

        total = await self.count(*conditions)

        sort_column = _SORT_COLUMNS[filters.sort_by]
        ordering = sort_column.asc() if filters.sort_order == SortOrder.ASC else sort_column.desc()

        query = (
            select(Content)
            .where(*conditions)
            .order_by(ordering, Content.id)
            .offset(offset)
            .limit(limit)
            .options(*self._load_options(options or ContentOptions()))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)

        return PaginatedContent(
            content=list(result.scalars().all()),
            total=total,
            page=filters.page,
            limit=limit,
            total_pages=math.ceil(total / limit) if total else 0,
        )

    def _build_conditions(self, filters: ContentFilters, actor: Actor) -> list[Any]:
        conditions: list[Any] = [Content.is_deleted.is_(False)]

        if filters.content_types:
            conditions.append(Content.content_type.in_(filters.content_types))
        if filters.note_types:
            conditions.append(_columns.note_type.in_(filters.note_types))
        if filters.resource_types:
            conditions.append(_columns.resource_type.in_(filters.resource_types))
        if filters.statuses:
            conditions.append(_columns.status.in_(filters.statuses))
        if filters.created_by:
            conditions.append(Content.created_by == filters.created_by)
        if filters.family_id:
            conditions.append(Content.family_id == filters.family_id)
        if filters.visibilities:
            conditions.append(Content.visibility.in_(filters.visibilities))
        if filters.category_id:
            conditions.append(Content.category_id == filters.category_id)

        # Plain tags, explicit healthcare tags and expanded categories all
        # feed one "has at least one of" set
        tag_set: list[str] = list(filters.tags or [])
        tag_set.extend(filters.healthcare_tags or [])
        if filters.healthcare_categories:
            tag_set.extend(
                expand_healthcare_categories(filters.healthcare_categories, self.healthcare_categories)
            )
        if tag_set:
            conditions.append(Content.tag_links.any(ContentTag.name.in_(set(tag_set))))
        elif filters.healthcare_categories:
            # Categories that expand to no tags match nothing
            conditions.append(false())

        if filters.has_assignments is not None:
            conditions.append(Content.has_assignments == filters.has_assignments)
        if filters.has_curation is not None:
            conditions.append(Content.has_curation == filters.has_curation)
        if filters.has_ratings is not None:
            conditions.append(Content.has_ratings == filters.has_ratings)

        if filters.featured:
            conditions.append(_columns.status == ResourceStatus.FEATURED)
        if filters.verified is not None:
            conditions.append(_columns.is_verified == filters.verified)
        if filters.min_rating is not None:
            conditions.append(_columns.rating >= filters.min_rating)
        if filters.is_pinned is not None:
            conditions.append(_columns.is_pinned == filters.is_pinned)

        if filters.search:
            pattern = f"%{_escape_like(filters.search)}%"
            conditions.append(
                or_(
                    Content.title.ilike(pattern, escape="\\"),
                    Content.description.ilike(pattern, escape="\\"),
                    Content.body.ilike(pattern, escape="\\"),
                    Content.tag_links.any(ContentTag.name == filters.search),
                )
            )

        if not actor.is_admin:
            conditions.append(self._visibility_gate(actor))

        return conditions

    @staticmethod
    def _visibility_gate(actor: Actor) -> Any:
        """Rows a non-admin may read: own, PUBLIC, own-family FAMILY, SHARED with them."""
        has_share = exists().where(
            ContentShare.content_id == Content.id,
            ContentShare.user_id == actor.user_id,
        )
        clauses = [
            Content.created_by == actor.user_id,
            Content.visibility == Visibility.PUBLIC,
            and_(Content.visibility == Visibility.SHARED, has_share),
        ]
        if actor.family_id is not None:
            clauses.append(
                and_(Content.visibility == Visibility.FAMILY, Content.family_id == actor.family_id)
            )
        return or_(*clauses)

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE & DELETE
    # ═══════════════════════════════════════════════════════════════════════════

    async def update(
        self,
        content_id: UUID,
        data: UpdateContentInput,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> Content:
        """
        Apply the fields explicitly set in ``data``.

        Editing a NOTE stamps last_edited_by / last_edited_at.

        Raises:
            ContentNotFoundError: Missing, deleted or not visible
            AuthorizationError: Visible but not editable by the actor
            ValidationError: Wrong-variant fields or a content_type change
        """
        actor = await self.users.get_actor(actor_id, actor_role)
        content = await self._authorize(content_id, actor, can_update, "update")

        changes = data.model_dump(exclude_unset=True)
        requested_type = changes.pop("content_type", None)
        if requested_type is not None and requested_type != content.content_type:
            raise ValidationError(
                "Content type cannot be changed",
                details={"content_type": content.content_type.value},
            )
        self._validate_variant_fields(content.content_type, changes)
        for field in _REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null", details={"field": field})
        if _VERIFICATION_FIELDS & set(changes):
            self._ensure_curator(actor, "verify")

        tags = changes.pop("tags", None)
        for field, value in changes.items():
            setattr(content, field, value)
        if tags is not None:
            content.replace_tags(tags)

        if content.content_type == ContentType.NOTE:
            content.last_edited_by = actor.user_id
            content.last_edited_at = utcnow()

        await self._flush("Failed to update content")

        logger.info(
            "Content updated",
            content_id=str(content_id),
            actor_id=str(actor_id),
            fields=sorted(changes) + (["tags"] if tags is not None else []),
        )

        return await self._fetch(
            content.id,
            ContentOptions(include_creator=True, include_family=True, include_category=True),
        )

    async def delete(self, content_id: UUID, actor_id: UUID, actor_role: UserRole) -> Content:
        """
        Soft delete. The row stays; is_deleted and deleted_at are set.

        Raises:
            ContentNotFoundError: Missing, already deleted or not visible
            AuthorizationError: Actor is neither admin nor creator
        """
        actor = await self.users.get_actor(actor_id, actor_role)
        content, _ = await self._find_accessible(content_id, actor, ContentOptions())
        if content is None:
            raise ContentNotFoundError()

        if not can_delete(content, actor):
            logger.warning(
                "Content delete denied",
                content_id=str(content_id),
                actor_id=str(actor_id),
                role=actor_role.value,
            )
            raise AuthorizationError("Insufficient permissions to delete content")

        content.mark_deleted()
        await self._flush("Failed to delete content")

        logger.info("Content deleted", content_id=str(content_id), actor_id=str(actor_id))
        return content

    async def increment_view_count(self, content_id: UUID) -> bool:
        """
        Add one to view_count in a single UPDATE. No access check.

        updated_at is left untouched; a view is not an edit.

        Returns:
            True if a row was updated

        SQL Generated:
            UPDATE content SET view_count = view_count + 1 WHERE id = '...'
        """
        result = await self.session.execute(
            update(Content)
            .where(Content.id == content_id)
            .values(view_count=Content.view_count + 1, updated_at=Content.updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # ASSIGNMENTS (NOTE only)
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_assignment(
        self,
        content_id: UUID,
        data: AssignmentInput,
        assigner_id: UUID,
        assigner_role: UserRole,
    ) -> ContentAssignment:
        """
        Assign a task on a NOTE.

        Volunteers may only assign to members of families they created;
        members cannot assign at all. The note's has_assignments flag is
        set and never cleared.

        Raises:
            ContentNotFoundError: Note missing, not visible, or not a NOTE
            UserNotFoundError: Assignee or assigner unknown
            AuthorizationError: Assignment not permitted
        """
        actor = await self.users.get_actor(assigner_id, assigner_role)
        content, _ = await self._find_accessible(content_id, actor, ContentOptions())
        if content is None or content.content_type != ContentType.NOTE:
            raise ContentNotFoundError("Content not found or not a NOTE")

        assignee = await self.users.get(data.assigned_to)
        assigner = await self.users.get(assigner_id)
        if assignee is None or assigner is None:
            raise UserNotFoundError()

        try:
            ensure_can_assign(actor, assignee.family_id)
        except AuthorizationError:
            logger.warning(
                "Assignment denied",
                content_id=str(content_id),
                assigner_id=str(assigner_id),
                assignee_id=str(data.assigned_to),
                role=assigner_role.value,
            )
            raise

        assignment = ContentAssignment(
            content_id=content.id,
            title=data.title,
            description=data.description,
            assigned_to=data.assigned_to,
            assigned_by=assigner_id,
            status=AssignmentStatus.ASSIGNED,
            priority=data.priority,
            due_date=data.due_date,
            estimated_minutes=data.estimated_minutes,
            tags=list(data.tags),
        )
        content.has_assignments = True
        await self.add(assignment, label="assignment")

        logger.info(
            "Assignment created",
            assignment_id=str(assignment.id),
            content_id=str(content_id),
            assigned_to=str(data.assigned_to),
            assigned_by=str(assigner_id),
            priority=data.priority.value,
        )

        return await self._fetch_assignment(assignment.id)

    async def update_assignment_status(
        self,
        assignment_id: UUID,
        status: AssignmentStatus,
        actor_id: UUID,
        actor_role: Optional[UserRole] = None,
        completion_notes: Optional[str] = None,
    ) -> ContentAssignment:
        """
        Move an assignment to ``status``.

        Allowed moves: ASSIGNED → IN_PROGRESS/COMPLETED/CANCELLED,
        IN_PROGRESS → COMPLETED/CANCELLED. Completing stamps completed_at,
        completed_by and, if given, completion_notes.

        Raises:
            AssignmentNotFoundError: Unknown assignment
            AuthorizationError: Actor is neither assignee nor assigner
            ValidationError: Transition not allowed from the current status
        """
        assignment = await self._fetch_assignment(assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(str(assignment_id))

        actor = Actor(user_id=actor_id, role=actor_role or UserRole.MEMBER)
        if not can_update_assignment(assignment, actor, admin_override=self.assignment_admin_override):
            logger.warning(
                "Assignment status update denied",
                assignment_id=str(assignment_id),
                actor_id=str(actor_id),
            )
            raise AuthorizationError("Only the assignee or assigner can update this assignment")

        previous = assignment.status
        if not can_transition_assignment(previous, status):
            raise ValidationError(
                f"Cannot change assignment status from {previous.value} to {status.value}",
                details={"from": previous.value, "to": status.value},
            )

        assignment.status = status
        if status == AssignmentStatus.COMPLETED:
            assignment.completed_at = utcnow()
            assignment.completed_by = actor_id
            if completion_notes is not None:
                assignment.completion_notes = completion_notes

        await self._flush("Failed to update assignment")

        logger.info(
            "Assignment status changed",
            assignment_id=str(assignment_id),
            actor_id=str(actor_id),
            from_status=previous.value,
            to_status=status.value,
        )

        return await self._fetch_assignment(assignment_id)

    async def get_assigned_tasks(
        self,
        user_id: UUID,
        statuses: Optional[Sequence[AssignmentStatus]] = None,
    ) -> list[ContentAssignment]:
        """
        Tasks assigned to ``user_id``.

        Ordered by priority (URGENT first), then due date with undated
        tasks last, then newest first. The note (with its family) and the
        assigner are loaded.
        """
        query = select(ContentAssignment).where(ContentAssignment.assigned_to == user_id)
        if statuses:
            query = query.where(ContentAssignment.status.in_(statuses))

        query = query.order_by(*_TASK_ORDER).options(
            selectinload(ContentAssignment.content).selectinload(Content.family),
            selectinload(ContentAssignment.assigner),
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_assignments_created_by(
        self,
        user_id: UUID,
        actor_role: UserRole,
        statuses: Optional[Sequence[AssignmentStatus]] = None,
    ) -> list[ContentAssignment]:
        """
        Tasks ``user_id`` handed out, in the same order as get_assigned_tasks().

        Volunteers only see tasks on notes of families they created. The
        note (with its family) and the assignee are loaded.
        """
        query = select(ContentAssignment).where(ContentAssignment.assigned_by == user_id)
        if actor_role == UserRole.VOLUNTEER:
            family_ids = await self.users.get_created_family_ids(user_id)
            query = query.where(
                ContentAssignment.content.has(Content.family_id.in_(list(family_ids)))
            )
        if statuses:
            query = query.where(ContentAssignment.status.in_(statuses))

        query = query.order_by(*_TASK_ORDER).options(
            selectinload(ContentAssignment.content).selectinload(Content.family),
            selectinload(ContentAssignment.assignee),
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update_assignment(
        self,
        assignment_id: UUID,
        data: AssignmentUpdate,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> ContentAssignment:
        """
        Revise the details of an open task.

        Raises:
            AssignmentNotFoundError: Unknown assignment
            AuthorizationError: Actor is not the assigner
            ValidationError: Task already completed or cancelled, or title nulled
        """
        assignment = await self._managed_assignment(assignment_id, actor_id, actor_role, "update")
        if not ALLOWED_ASSIGNMENT_TRANSITIONS[assignment.status]:
            raise ValidationError(
                f"Cannot edit a {assignment.status.value} assignment",
                details={"status": assignment.status.value},
            )

        changes = data.model_dump(exclude_unset=True)
        for field in ("title", "priority"):
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null", details={"field": field})
        if "tags" in changes:
            changes["tags"] = list(changes["tags"] or [])

        for field, value in changes.items():
            setattr(assignment, field, value)

        await self._flush("Failed to update assignment")

        logger.info(
            "Assignment updated",
            assignment_id=str(assignment_id),
            actor_id=str(actor_id),
            fields=sorted(changes),
        )

        return await self._fetch_assignment(assignment_id)

    async def delete_assignment(
        self,
        assignment_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> None:
        """
        Withdraw a task. The note keeps has_assignments.

        Raises:
            AssignmentNotFoundError: Unknown assignment
            AuthorizationError: Actor is not the assigner
        """
        assignment = await self._managed_assignment(assignment_id, actor_id, actor_role, "delete")
        content_id = assignment.content_id
        await self.session.delete(assignment)
        await self._flush("Failed to delete assignment")

        logger.info(
            "Assignment deleted",
            assignment_id=str(assignment_id),
            content_id=str(content_id),
            actor_id=str(actor_id),
        )

    async def _managed_assignment(
        self,
        assignment_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
        action: str,
    ) -> ContentAssignment:
        assignment = await self._fetch_assignment(assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(str(assignment_id))

        actor = Actor(user_id=actor_id, role=actor_role)
        if not can_manage_assignment(assignment, actor, admin_override=self.assignment_admin_override):
            logger.warning(
                f"Assignment {action} denied",
                assignment_id=str(assignment_id),
                actor_id=str(actor_id),
            )
            raise AuthorizationError(f"Only the assigner can {action} this assignment")
        return assignment

    # ═══════════════════════════════════════════════════════════════════════════
    # CURATION & RATINGS (RESOURCE only)
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_curation_queue(self, actor_id: UUID, actor_role: UserRole) -> list[Content]:
        """
        Resources waiting for an admin, oldest first.

        Raises:
            AuthorizationError: Actor is not an admin
        """
        self._ensure_curator(Actor(user_id=actor_id, role=actor_role), "queue")

        query = (
            select(Content)
            .where(
                Content.content_type == ContentType.RESOURCE,
                _columns.status == ResourceStatus.PENDING,
                Content.has_curation.is_(True),
                Content.is_deleted.is_(False),
            )
            .order_by(Content.created_at.asc())
            .options(*self._load_options(ContentOptions(include_creator=True, include_category=True)))
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def approve_content(self, content_id: UUID, actor_id: UUID, actor_role: UserRole) -> Content:
        """Mark a resource APPROVED and take it out of the curation queue."""
        return await self._curate(content_id, actor_id, actor_role, ResourceStatus.APPROVED)

    async def feature_content(self, content_id: UUID, actor_id: UUID, actor_role: UserRole) -> Content:
        """Mark a resource FEATURED. Approval first is not required."""
        return await self._curate(content_id, actor_id, actor_role, ResourceStatus.FEATURED)

    async def _curate(
        self,
        content_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
        status: ResourceStatus,
    ) -> Content:
        actor = await self.users.get_actor(actor_id, actor_role)
        self._ensure_curator(actor, status.value.lower())

        content, _ = await self._find_accessible(content_id, actor, ContentOptions())
        if content is None or content.content_type != ContentType.RESOURCE:
            raise ContentNotFoundError("Content not found or not a RESOURCE")

        now = utcnow()
        content.status = status
        content.has_curation = False
        if status == ResourceStatus.FEATURED:
            content.featured_by = actor_id
            content.featured_at = now
        else:
            content.approved_by = actor_id
            content.approved_at = now

        await self._flush("Failed to curate content")

        logger.info(
            "Content approved" if status == ResourceStatus.APPROVED else "Content featured",
            content_id=str(content_id),
            actor_id=str(actor_id),
        )

        return await self._fetch(
            content.id,
            ContentOptions(include_creator=True, include_family=True, include_category=True),
        )

    @staticmethod
    def _ensure_curator(actor: Actor, action: str) -> None:
        try:
            ensure_can_curate(actor)
        except AuthorizationError:
            logger.warning(
                "Curation denied",
                action=action,
                actor_id=str(actor.user_id),
                role=actor.role.value,
            )
            raise

    async def rate_content(
        self,
        content_id: UUID,
        user_id: UUID,
        rating: int,
        review: Optional[str] = None,
        is_helpful: Optional[bool] = None,
    ) -> ContentRating:
        """
        Record ``user_id``'s rating of a resource, replacing any earlier one,
        then recompute the resource's average and count.

        Raises:
            ValidationError: Rating outside 1-5, or content is not a RESOURCE
            ContentNotFoundError: Content missing or deleted
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError(
                "Rating must be an integer between 1 and 5",
                details={"rating": rating},
            )

        content = await self._fetch(content_id, ContentOptions())
        if content is None:
            raise ContentNotFoundError("Content not found")
        if content.content_type != ContentType.RESOURCE:
            raise ValidationError("Content not found or not ratable")

        result = await self.session.execute(
            select(ContentRating).where(
                ContentRating.content_id == content_id,
                ContentRating.user_id == user_id,
            )
        )
        content_rating = result.scalar_one_or_none()

        if content_rating is None:
            content_rating = ContentRating(
                content_id=content_id,
                user_id=user_id,
                rating=rating,
                review=review,
                is_helpful=is_helpful,
            )
            await self.add(content_rating, label="rating")
        else:
            content_rating.rating = rating
            if review is not None:
                content_rating.review = review
            if is_helpful is not None:
                content_rating.is_helpful = is_helpful
            await self._flush("Failed to rate content")

        await self._recalculate_rating(content)

        logger.info(
            "Content rated",
            content_id=str(content_id),
            user_id=str(user_id),
            rating=rating,
            average=content.rating,
            count=content.rating_count,
        )

        ratings = await self.session.execute(
            select(ContentRating)
            .where(ContentRating.id == content_rating.id)
            .options(selectinload(ContentRating.user))
            .execution_options(populate_existing=True)
        )
        return ratings.scalar_one()

    async def _recalculate_rating(self, content: Content) -> None:
        """Full re-aggregation of every rating on ``content``."""
        result = await self.session.execute(
            select(ContentRating.rating).where(ContentRating.content_id == content.id)
        )
        values = list(result.scalars().all())

        if not values:
            content.rating = None
            content.rating_count = 0
        else:
            mean = Decimal(sum(values)) / Decimal(len(values))
            content.rating = float(mean.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))
            content.rating_count = len(values)
            content.has_ratings = True

        await self._flush("Failed to update rating")

    async def average_rating(self, *criteria: Any) -> float:
        """Mean of the stored resource ratings over rated rows matching ``criteria``."""
        result = await self.session.execute(
            select(func.avg(_columns.rating)).where(_columns.rating.is_not(None), *criteria)
        )
        value = result.scalar()
        return float(value) if value is not None else 0.0

    # ═══════════════════════════════════════════════════════════════════════════
    # DOCUMENTS & SHARES
    # ═══════════════════════════════════════════════════════════════════════════
    #
    # attach_document() and share_content() trust their caller. Handlers run
    # authorize_update() / authorize_share() first.

    async def authorize_update(self, content_id: UUID, actor_id: UUID, actor_role: UserRole) -> Content:
        """
        Load content the actor may modify.

        Raises:
            ContentNotFoundError: Missing, deleted or not visible
            AuthorizationError: Visible but not editable by the actor
        """
        actor = await self.users.get_actor(actor_id, actor_role)
        return await self._authorize(content_id, actor, can_update, "update")

    async def authorize_share(self, content_id: UUID, actor_id: UUID, actor_role: UserRole) -> Content:
        """
        Load content the actor may share with other users.

        Raises:
            ContentNotFoundError: Missing, deleted or not visible
            AuthorizationError: Visible but the actor may not share it
        """
        actor = await self.users.get_actor(actor_id, actor_role)
        return await self._authorize(content_id, actor, can_share_content, "share")

    async def attach_document(
        self,
        content_id: UUID,
        document_id: UUID,
        attached_by: UUID,
        order: int = 0,
        is_main: bool = False,
    ) -> ContentDocument:
        """
        Attach a document to content. Callers check permissions.

        Raises:
            ContentNotFoundError: Content missing or deleted
            NotFoundError: Document unknown
        """
        if await self._fetch(content_id, ContentOptions()) is None:
            raise ContentNotFoundError("Content not found")
        if await self.session.get(Document, document_id) is None:
            raise NotFoundError("Document", str(document_id))

        link = ContentDocument(
            content_id=content_id,
            document_id=document_id,
            created_by=attached_by,
            order=order,
            is_main=is_main,
        )
        await self.add(link, label="content document")

        logger.info(
            "Document attached",
            content_id=str(content_id),
            document_id=str(document_id),
            attached_by=str(attached_by),
        )

        result = await self.session.execute(
            select(ContentDocument)
            .where(ContentDocument.id == link.id)
            .options(selectinload(ContentDocument.document))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def detach_document(
        self,
        content_id: UUID,
        document_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> int:
        """
        Remove a document from content the actor may modify.

        Returns:
            Number of attachment rows removed

        Raises:
            ContentNotFoundError: Content missing, deleted or not visible
            AuthorizationError: Visible but not editable by the actor
        """
        await self.authorize_update(content_id, actor_id, actor_role)

        result = await self.session.execute(
            delete(ContentDocument)
            .where(
                ContentDocument.content_id == content_id,
                ContentDocument.document_id == document_id,
            )
            .execution_options(synchronize_session="fetch")
        )

        logger.info(
            "Document detached",
            content_id=str(content_id),
            document_id=str(document_id),
            actor_id=str(actor_id),
            removed=result.rowcount,
        )
        return result.rowcount

    async def share_content(
        self,
        content_id: UUID,
        shared_by: UUID,
        user_id: Optional[UUID],
        permissions: Optional[SharePermissions] = None,
        share_method: Optional[str] = None,
        share_data: Optional[dict[str, Any]] = None,
    ) -> ContentShare:
        """
        Share content with a user.

        NOTE shares carry permission bits (edit off, comment on, reshare off
        unless given). RESOURCE shares leave the bits NULL and may record how
        the resource was passed on.

        Raises:
            ContentNotFoundError: Content missing or deleted
        """
        content = await self._fetch(content_id, ContentOptions())
        if content is None:
            raise ContentNotFoundError("Content not found")

        permissions = permissions or SharePermissions()
        share = ContentShare(
            content_id=content_id,
            user_id=user_id,
            shared_by=shared_by,
            share_method=share_method,
            share_data=share_data,
        )
        if content.content_type == ContentType.NOTE:
            share.can_edit = permissions.can_edit if permissions.can_edit is not None else False
            share.can_comment = permissions.can_comment if permissions.can_comment is not None else True
            share.can_share = permissions.can_share if permissions.can_share is not None else False

        content.has_sharing = True
        await self.add(share, label="share")

        logger.info(
            "Content shared",
            content_id=str(content_id),
            shared_by=str(shared_by),
            user_id=str(user_id) if user_id else None,
            share_method=share_method,
        )

        result = await self.session.execute(
            select(ContentShare)
            .where(ContentShare.id == share.id)
            .options(selectinload(ContentShare.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    # ═══════════════════════════════════════════════════════════════════════════
    # INTERNALS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _find_accessible(
        self,
        content_id: UUID,
        actor: Actor,
        options: ContentOptions,
    ) -> tuple[Optional[Content], Optional[ContentShare]]:
        """Load a row and the actor's share; (None, None) when hidden."""
        content = await self._fetch(content_id, options)
        if content is None:
            return None, None

        share = None
        if not actor.is_admin and content.created_by != actor.user_id:
            share = await self._get_share(content.id, actor.user_id)

        if not check_content_access(content, actor, share):
            logger.warning(
                "Content access denied",
                content_id=str(content_id),
                actor_id=str(actor.user_id),
                role=actor.role.value,
                visibility=content.visibility.value,
            )
            return None, None
        return content, share

    async def _authorize(
        self,
        content_id: UUID,
        actor: Actor,
        predicate: Callable[[Any, Actor, Any], bool],
        action: str,
    ) -> Content:
        """Visible content that ``predicate`` allows, or the matching error."""
        content, share = await self._find_accessible(content_id, actor, ContentOptions())
        if content is None:
            raise ContentNotFoundError()

        if not predicate(content, actor, share):
            logger.warning(
                f"Content {action} denied",
                content_id=str(content_id),
                actor_id=str(actor.user_id),
                role=actor.role.value,
            )
            raise AuthorizationError(f"Insufficient permissions to {action} content")
        return content

    async def _get_share(self, content_id: UUID, user_id: UUID) -> Optional[ContentShare]:
        result = await self.session.execute(
            select(ContentShare)
            .where(ContentShare.content_id == content_id, ContentShare.user_id == user_id)
            .order_by(ContentShare.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def _fetch(self, content_id: UUID, options: ContentOptions) -> Optional[Content]:
        """Load one row with the requested relations, refreshing any cached copy."""
        query = (
            select(Content)
            .where(Content.id == content_id)
            .options(*self._load_options(options))
            .execution_options(populate_existing=True)
        )
        if not options.include_deleted:
            query = query.where(Content.is_deleted.is_(False))
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def _fetch_assignment(self, assignment_id: UUID) -> Optional[ContentAssignment]:
        result = await self.session.execute(
            select(ContentAssignment)
            .where(ContentAssignment.id == assignment_id)
            .options(
                selectinload(ContentAssignment.assignee),
                selectinload(ContentAssignment.assigner),
                selectinload(ContentAssignment.content).selectinload(Content.family),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _load_options(options: ContentOptions) -> list[Any]:
        loads: list[Any] = []
        if options.include_creator:
            loads.append(selectinload(Content.creator))
        if options.include_family:
            loads.append(selectinload(Content.family))
        if options.include_category:
            loads.append(selectinload(Content.category))
        if options.include_documents:
            loads.append(selectinload(Content.documents).selectinload(ContentDocument.document))
        if options.include_shares:
            loads.append(selectinload(Content.shares).selectinload(ContentShare.user))
        if options.include_assignments:
            loads.append(
                selectinload(Content.assignments).options(
                    selectinload(ContentAssignment.assignee),
                    selectinload(ContentAssignment.assigner),
                )
            )
        if options.include_structured_tags:
            loads.append(
                selectinload(Content.structured_tags).selectinload(ContentStructuredTag.tag)
            )
        if options.include_ratings:
            loads.append(selectinload(Content.ratings).selectinload(ContentRating.user))
        return loads

    @staticmethod
    def _validate_variant_fields(content_type: ContentType, fields: Any) -> None:
        """Reject fields that belong to the other content variant."""
        foreign = RESOURCE_ONLY_FIELDS if content_type == ContentType.NOTE else NOTE_ONLY_FIELDS
        invalid = sorted(set(fields) & foreign)
        if invalid:
            raise ValidationError(
                f"Fields not valid for {content_type.value} content: {', '.join(invalid)}",
                details={"content_type": content_type.value, "fields": invalid},
            )

    async def _flush(self, message: str) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"{message}: {e.__class__.__name__}") from e
