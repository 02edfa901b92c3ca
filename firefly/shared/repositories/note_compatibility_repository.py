"""
Note Compatibility Repository

Serves the legacy note API on top of the unified content table. No storage
of its own: every call is translated and forwarded to ContentRepository.

Field Mapping:
==============
    legacy          unified
    -------------   -------------
    content      ↔  body
    type         ↔  note_type
    (implicit)   →  content_type = NOTE

Records that turn out to be RESOURCE rows are treated as missing.
"""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from firefly.shared.models.content import Content
from firefly.shared.models.content_assignment import ContentAssignment
from firefly.shared.models.content_document import ContentDocument
from firefly.shared.models.content_share import ContentShare
from firefly.shared.models.enums import AssignmentStatus, ContentType, UserRole
from firefly.shared.repositories.content_repository import ContentRepository
from firefly.shared.schemas.content import (
    AssignmentInput,
    ContentFilters,
    ContentOptions,
    ContentResponse,
    CreateContentInput,
    SharePermissions,
    UpdateContentInput,
)
from firefly.shared.schemas.note import (
    CreateNoteInput,
    LegacyNote,
    NoteFilters,
    PaginatedNotes,
    UpdateNoteInput,
)


_NOTE_DETAIL = ContentOptions(
    include_documents=True,
    include_shares=True,
    include_assignments=True,
    include_structured_tags=True,
    include_creator=True,
    include_family=True,
    include_category=True,
)

_NOTE_LIST = ContentOptions(include_creator=True, include_family=True, include_category=True)

# Legacy name → unified name
_RENAMED = {"content": "body", "type": "note_type"}


def _to_legacy(content: Content) -> LegacyNote:
    return LegacyNote.from_content(ContentResponse.from_model(content))


class NoteCompatibilityRepository:
    """
    Legacy note operations backed by ContentRepository.

    Usage:
        notes = NoteCompatibilityRepository(db)
        note = await notes.create(CreateNoteInput(title="Visit"), user_id, role)
    """

    def __init__(self, session: AsyncSession, content: Optional[ContentRepository] = None) -> None:
        self.content = content or ContentRepository(session)

    async def create(self, data: CreateNoteInput, actor_id: UUID, actor_role: UserRole) -> LegacyNote:
        fields = {_RENAMED.get(k, k): v for k, v in data.model_dump(exclude_none=True).items()}
        created = await self.content.create(
            CreateContentInput(content_type=ContentType.NOTE, **fields),
            actor_id,
            actor_role,
        )
        return _to_legacy(created)

    async def find_by_id(
        self,
        note_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> Optional[LegacyNote]:
        """The note with every relation notes have, or None if missing, hidden or not a NOTE."""
        content = await self.content.find_by_id(note_id, actor_id, actor_role, _NOTE_DETAIL)
        if content is None or content.content_type != ContentType.NOTE:
            return None
        return _to_legacy(content)

    async def filter(self, filters: NoteFilters, actor_id: UUID, actor_role: UserRole) -> PaginatedNotes:
        page = await self.content.filter(
            ContentFilters(
                content_types=[ContentType.NOTE],
                created_by=filters.created_by,
                family_id=filters.family_id,
                note_types=filters.type,
                visibilities=filters.visibility,
                category_id=filters.category_id,
                tags=filters.tags,
                search=filters.search,
                has_assignments=filters.has_assignments,
                is_pinned=filters.is_pinned,
                page=filters.page,
                limit=filters.limit,
                sort_by=filters.sort_by,
                sort_order=filters.sort_order,
            ),
            actor_id,
            actor_role,
            _NOTE_LIST,
        )
        return PaginatedNotes(
            content=[_to_legacy(c) for c in page.content],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )

    async def update(
        self,
        note_id: UUID,
        data: UpdateNoteInput,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> LegacyNote:
        fields = {_RENAMED.get(k, k): v for k, v in data.model_dump(exclude_unset=True).items()}
        updated = await self.content.update(
            note_id,
            UpdateContentInput(content_type=ContentType.NOTE, **fields),
            actor_id,
            actor_role,
        )
        return _to_legacy(updated)

    async def delete(self, note_id: UUID, actor_id: UUID, actor_role: UserRole) -> None:
        await self.content.delete(note_id, actor_id, actor_role)

    async def increment_view_count(self, note_id: UUID) -> bool:
        return await self.content.increment_view_count(note_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # DELEGATED WORKFLOWS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_assignment(
        self,
        note_id: UUID,
        data: AssignmentInput,
        assigner_id: UUID,
        assigner_role: UserRole,
    ) -> ContentAssignment:
        return await self.content.create_assignment(note_id, data, assigner_id, assigner_role)

    async def update_assignment_status(
        self,
        assignment_id: UUID,
        status: AssignmentStatus,
        actor_id: UUID,
        actor_role: Optional[UserRole] = None,
        completion_notes: Optional[str] = None,
    ) -> ContentAssignment:
        return await self.content.update_assignment_status(
            assignment_id, status, actor_id, actor_role, completion_notes
        )

    async def get_assigned_tasks(
        self,
        user_id: UUID,
        statuses: Optional[Sequence[AssignmentStatus]] = None,
    ) -> list[ContentAssignment]:
        return await self.content.get_assigned_tasks(user_id, statuses)

    async def attach_document(
        self,
        note_id: UUID,
        document_id: UUID,
        attached_by: UUID,
        order: int = 0,
    ) -> ContentDocument:
        # Notes have no main document
        return await self.content.attach_document(note_id, document_id, attached_by, order, is_main=False)

    async def detach_document(
        self,
        note_id: UUID,
        document_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> int:
        return await self.content.detach_document(note_id, document_id, actor_id, actor_role)

    async def share_note(
        self,
        note_id: UUID,
        shared_by: UUID,
        user_id: UUID,
        permissions: Optional[SharePermissions] = None,
    ) -> ContentShare:
        return await self.content.share_content(note_id, shared_by, user_id, permissions)

    async def authorize_share(self, note_id: UUID, actor_id: UUID, actor_role: UserRole) -> None:
        """Raise unless the actor may share the note: creator, admin, or a can_share holder."""
        await self.content.authorize_share(note_id, actor_id, actor_role)
