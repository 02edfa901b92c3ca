"""
Assignment Handler

Task assignment on notes.

    POST   /content/{content_id}/assignments   → Assign a task
    GET    /assignments/mine                   → Caller's tasks, most urgent first
    GET    /assignments/created                → Tasks the caller handed out
    PATCH  /assignments/{assignment_id}        → Assigner revises an open task
    DELETE /assignments/{assignment_id}        → Assigner withdraws a task
    PATCH  /assignments/{assignment_id}/status → Move a task along its lifecycle
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from firefly.api.dependencies import ContentRepo, CurrentActor
from firefly.shared.models.enums import AssignmentStatus
from firefly.shared.schemas.content import (
    AssignmentInput,
    AssignmentResponse,
    AssignmentStatusUpdate,
    AssignmentUpdate,
)


router = APIRouter()


@router.post(
    "/content/{content_id}/assignments",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_assignment(
    content_id: UUID,
    data: AssignmentInput,
    actor: CurrentActor,
    repo: ContentRepo,
):
    assignment = await repo.create_assignment(content_id, data, actor.user_id, actor.role)
    return AssignmentResponse.from_model(assignment)


@router.get("/assignments/mine", response_model=list[AssignmentResponse])
async def list_my_assignments(
    actor: CurrentActor,
    repo: ContentRepo,
    status_filter: Optional[list[AssignmentStatus]] = Query(None, alias="status"),
):
    """Tasks assigned to the caller, optionally narrowed by status."""
    tasks = await repo.get_assigned_tasks(actor.user_id, status_filter)
    return [AssignmentResponse.from_model(t) for t in tasks]


@router.patch("/assignments/{assignment_id}/status", response_model=AssignmentResponse)
async def update_assignment_status(
    assignment_id: UUID,
    data: AssignmentStatusUpdate,
    actor: CurrentActor,
    repo: ContentRepo,
):
    assignment = await repo.update_assignment_status(
        assignment_id,
        data.status,
        actor.user_id,
        actor.role,
        data.completion_notes,
    )
    return AssignmentResponse.from_model(assignment)


@router.get("/assignments/created", response_model=list[AssignmentResponse])
async def list_created_assignments(
    actor: CurrentActor,
    repo: ContentRepo,
    status_filter: Optional[list[AssignmentStatus]] = Query(None, alias="status"),
):
    """Tasks the caller assigned. Volunteers see only their own families' notes."""
    tasks = await repo.get_assignments_created_by(actor.user_id, actor.role, status_filter)
    return [AssignmentResponse.from_model(t) for t in tasks]


@router.patch("/assignments/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    assignment_id: UUID,
    data: AssignmentUpdate,
    actor: CurrentActor,
    repo: ContentRepo,
):
    assignment = await repo.update_assignment(assignment_id, data, actor.user_id, actor.role)
    return AssignmentResponse.from_model(assignment)


@router.delete("/assignments/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment(assignment_id: UUID, actor: CurrentActor, repo: ContentRepo):
    await repo.delete_assignment(assignment_id, actor.user_id, actor.role)
    return None
