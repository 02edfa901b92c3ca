"""
Note Handler

Legacy note endpoints, served through NoteCompatibilityRepository.
Older clients keep their field names (content, type); storage is the
unified content table.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from firefly.api.dependencies import CurrentActor, NoteRepo
from firefly.shared.core.exceptions import ContentNotFoundError
from firefly.shared.schemas.content import (
    AssignmentInput,
    AssignmentResponse,
    ShareContentInput,
    SharePermissions,
    ShareResponse,
)
from firefly.shared.schemas.note import (
    CreateNoteInput,
    LegacyNote,
    NoteFilters,
    PaginatedNotes,
    UpdateNoteInput,
)


router = APIRouter()


@router.post("", response_model=LegacyNote, status_code=status.HTTP_201_CREATED)
async def create_note(data: CreateNoteInput, actor: CurrentActor, notes: NoteRepo):
    return await notes.create(data, actor.user_id, actor.role)


@router.get("", response_model=PaginatedNotes)
async def list_notes(
    filters: Annotated[NoteFilters, Query()],
    actor: CurrentActor,
    notes: NoteRepo,
):
    return await notes.filter(filters, actor.user_id, actor.role)


@router.get("/{note_id}", response_model=LegacyNote)
async def get_note(note_id: UUID, actor: CurrentActor, notes: NoteRepo):
    note = await notes.find_by_id(note_id, actor.user_id, actor.role)
    if note is None:
        raise ContentNotFoundError("Note not found or access denied")
    return note


@router.patch("/{note_id}", response_model=LegacyNote)
async def update_note(
    note_id: UUID,
    data: UpdateNoteInput,
    actor: CurrentActor,
    notes: NoteRepo,
):
    return await notes.update(note_id, data, actor.user_id, actor.role)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: UUID, actor: CurrentActor, notes: NoteRepo):
    await notes.delete(note_id, actor.user_id, actor.role)
    return None


@router.post(
    "/{note_id}/assignments",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_note(
    note_id: UUID,
    data: AssignmentInput,
    actor: CurrentActor,
    notes: NoteRepo,
):
    assignment = await notes.create_assignment(note_id, data, actor.user_id, actor.role)
    return AssignmentResponse.from_model(assignment)


@router.post("/{note_id}/shares", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
async def share_note(
    note_id: UUID,
    data: ShareContentInput,
    actor: CurrentActor,
    notes: NoteRepo,
):
    if await notes.find_by_id(note_id, actor.user_id, actor.role) is None:
        raise ContentNotFoundError("Note not found or access denied")
    await notes.authorize_share(note_id, actor.user_id, actor.role)
    share = await notes.share_note(
        note_id,
        actor.user_id,
        data.user_id,
        SharePermissions(
            can_edit=data.can_edit,
            can_comment=data.can_comment,
            can_share=data.can_share,
        ),
    )
    return ShareResponse.from_model(share)
