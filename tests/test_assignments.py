"""Tests for task assignments on notes."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from firefly.shared.core.exceptions import (
    AssignmentNotFoundError,
    AuthorizationError,
    ContentNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from firefly.shared.models.enums import AssignmentPriority, AssignmentStatus, Visibility
from firefly.shared.repositories import ContentRepository
from firefly.shared.schemas.content import AssignmentInput, AssignmentUpdate


DUE = datetime(2026, 11, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def note(world, make_note):
    return await make_note(world.volunteer, title="Care rota", family_id=world.family_a.id)


async def _assign(repo, content_id, assigner, assignee, **fields):
    fields.setdefault("title", "Pick up prescription")
    return await repo.create_assignment(
        content_id,
        AssignmentInput(assigned_to=assignee.id, **fields),
        assigner.id,
        assigner.role,
    )


class TestCreateAssignment:
    async def test_volunteer_assigns_inside_created_family(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member, tags=["pharmacy"])

        assert assignment.status == AssignmentStatus.ASSIGNED
        assert assignment.priority == AssignmentPriority.MEDIUM
        assert assignment.assigned_by == world.volunteer.id
        assert assignment.assignee.id == world.member.id
        assert assignment.content.family.name == "Rivera family"
        assert assignment.tags == ["pharmacy"]

        refreshed = await repo.find_by_id(note.id, world.volunteer.id, world.volunteer.role)
        assert refreshed.has_assignments is True

    async def test_volunteer_cannot_assign_outside_created_families(self, world, repo, note):
        with pytest.raises(AuthorizationError):
            await _assign(repo, note.id, world.volunteer, world.outsider)

    async def test_member_cannot_assign(self, world, repo, make_note):
        own = await make_note(world.member)
        with pytest.raises(AuthorizationError):
            await _assign(repo, own.id, world.member, world.member_b)

    async def test_admin_assigns_anyone(self, world, repo, make_note):
        admin_note = await make_note(world.admin)
        assignment = await _assign(repo, admin_note.id, world.admin, world.outsider)
        assert assignment.assigned_to == world.outsider.id

    async def test_resources_cannot_be_assigned(self, world, repo, make_resource):
        resource = await make_resource(world.admin)
        with pytest.raises(ContentNotFoundError):
            await _assign(repo, resource.id, world.admin, world.member)

    async def test_invisible_note_reads_as_missing(self, world, repo, make_note):
        private = await make_note(world.member)
        with pytest.raises(ContentNotFoundError):
            await _assign(repo, private.id, world.volunteer, world.member)

    async def test_unknown_assignee(self, world, repo, note):
        with pytest.raises(UserNotFoundError):
            await repo.create_assignment(
                note.id,
                AssignmentInput(title="Ghost", assigned_to=uuid4()),
                world.volunteer.id,
                world.volunteer.role,
            )


class TestAssignedTasks:
    async def test_priority_then_due_date(self, world, repo, note):
        for priority in (AssignmentPriority.LOW, AssignmentPriority.URGENT, AssignmentPriority.MEDIUM):
            await _assign(
                repo, note.id, world.volunteer, world.member, title=priority.value, priority=priority, due_date=DUE
            )

        tasks = await repo.get_assigned_tasks(world.member.id)
        assert [t.priority for t in tasks] == [
            AssignmentPriority.URGENT,
            AssignmentPriority.MEDIUM,
            AssignmentPriority.LOW,
        ]

    async def test_undated_tasks_sort_last_within_priority(self, world, repo, note):
        undated = await _assign(repo, note.id, world.volunteer, world.member, title="Undated")
        later = await _assign(
            repo, note.id, world.volunteer, world.member, title="Later", due_date=DUE + timedelta(days=3)
        )
        sooner = await _assign(repo, note.id, world.volunteer, world.member, title="Sooner", due_date=DUE)

        tasks = await repo.get_assigned_tasks(world.member.id)
        assert [t.id for t in tasks] == [sooner.id, later.id, undated.id]

    async def test_status_filter(self, world, repo, note):
        first = await _assign(repo, note.id, world.volunteer, world.member)
        await _assign(repo, note.id, world.volunteer, world.member)
        await repo.update_assignment_status(
            first.id, AssignmentStatus.IN_PROGRESS, world.member.id, world.member.role
        )

        active = await repo.get_assigned_tasks(world.member.id, [AssignmentStatus.IN_PROGRESS])
        assert [t.id for t in active] == [first.id]
        assert active[0].content.title == "Care rota"
        assert active[0].assigner.id == world.volunteer.id

    async def test_only_own_tasks(self, world, repo, note):
        await _assign(repo, note.id, world.volunteer, world.member)
        assert await repo.get_assigned_tasks(world.member_b.id) == []


class TestUpdateAssignmentStatus:
    async def test_assignee_progresses_and_completes(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)

        started = await repo.update_assignment_status(
            assignment.id, AssignmentStatus.IN_PROGRESS, world.member.id, world.member.role
        )
        assert started.status == AssignmentStatus.IN_PROGRESS
        assert started.completed_at is None

        done = await repo.update_assignment_status(
            assignment.id,
            AssignmentStatus.COMPLETED,
            world.member.id,
            world.member.role,
            completion_notes="Collected at 4pm",
        )
        assert done.status == AssignmentStatus.COMPLETED
        assert done.completed_by == world.member.id
        assert done.completed_at is not None
        assert done.completion_notes == "Collected at 4pm"

    async def test_assigner_may_cancel(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)

        cancelled = await repo.update_assignment_status(
            assignment.id, AssignmentStatus.CANCELLED, world.volunteer.id, world.volunteer.role
        )
        assert cancelled.status == AssignmentStatus.CANCELLED
        assert cancelled.completed_at is None

    async def test_terminal_status_cannot_reopen(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)
        await repo.update_assignment_status(
            assignment.id, AssignmentStatus.COMPLETED, world.member.id, world.member.role
        )

        with pytest.raises(ValidationError) as exc_info:
            await repo.update_assignment_status(
                assignment.id, AssignmentStatus.IN_PROGRESS, world.member.id, world.member.role
            )
        assert exc_info.value.details == {"from": "COMPLETED", "to": "IN_PROGRESS"}

    async def test_third_party_denied(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)
        with pytest.raises(AuthorizationError):
            await repo.update_assignment_status(
                assignment.id, AssignmentStatus.IN_PROGRESS, world.member_b.id, world.member_b.role
            )

    async def test_admin_needs_override(self, world, repo, session, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)
        with pytest.raises(AuthorizationError):
            await repo.update_assignment_status(
                assignment.id, AssignmentStatus.CANCELLED, world.admin.id, world.admin.role
            )

        overriding = ContentRepository(session, assignment_admin_override=True)
        cancelled = await overriding.update_assignment_status(
            assignment.id, AssignmentStatus.CANCELLED, world.admin.id, world.admin.role
        )
        assert cancelled.status == AssignmentStatus.CANCELLED

    async def test_unknown_assignment(self, world, repo):
        with pytest.raises(AssignmentNotFoundError):
            await repo.update_assignment_status(
                uuid4(), AssignmentStatus.COMPLETED, world.member.id, world.member.role
            )

    async def test_has_assignments_survives_cancellation(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)
        await repo.update_assignment_status(
            assignment.id, AssignmentStatus.CANCELLED, world.volunteer.id, world.volunteer.role
        )

        refreshed = await repo.find_by_id(note.id, world.volunteer.id, world.volunteer.role)
        assert refreshed.has_assignments is True


class TestAssignmentsCreatedBy:
    async def test_volunteer_sees_created_families_only(self, world, repo, note, make_note):
        inside = await _assign(repo, note.id, world.volunteer, world.member)
        elsewhere = await make_note(world.volunteer, title="Other family", family_id=world.family_b.id)
        await _assign(repo, elsewhere.id, world.volunteer, world.member)
        unfiled = await make_note(world.volunteer, title="No family")
        await _assign(repo, unfiled.id, world.volunteer, world.member_b)

        tasks = await repo.get_assignments_created_by(world.volunteer.id, world.volunteer.role)

        assert [t.id for t in tasks] == [inside.id]
        assert tasks[0].assignee.id == world.member.id
        assert tasks[0].content.family.name == "Rivera family"

    async def test_admin_sees_everything_they_assigned(self, world, repo, make_note):
        own = await make_note(world.admin, title="Admin rota")
        first = await _assign(repo, own.id, world.admin, world.outsider, priority=AssignmentPriority.LOW)
        second = await _assign(repo, own.id, world.admin, world.member, priority=AssignmentPriority.URGENT)

        tasks = await repo.get_assignments_created_by(world.admin.id, world.admin.role)
        assert [t.id for t in tasks] == [second.id, first.id]

    async def test_status_filter(self, world, repo, note):
        open_task = await _assign(repo, note.id, world.volunteer, world.member)
        done = await _assign(repo, note.id, world.volunteer, world.member)
        await repo.update_assignment_status(done.id, AssignmentStatus.COMPLETED, world.member.id, world.member.role)

        tasks = await repo.get_assignments_created_by(
            world.volunteer.id, world.volunteer.role, [AssignmentStatus.ASSIGNED]
        )
        assert [t.id for t in tasks] == [open_task.id]

    async def test_other_users_tasks_excluded(self, world, repo, note):
        await _assign(repo, note.id, world.volunteer, world.member)
        assert await repo.get_assignments_created_by(world.admin.id, world.admin.role) == []


class TestUpdateAssignment:
    async def test_assigner_revises_details(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member, tags=["pharmacy"])

        updated = await repo.update_assignment(
            assignment.id,
            AssignmentUpdate(title="Collect refill", priority=AssignmentPriority.HIGH, due_date=DUE, tags=[]),
            world.volunteer.id,
            world.volunteer.role,
        )

        assert updated.title == "Collect refill"
        assert updated.priority == AssignmentPriority.HIGH
        assert updated.due_date.replace(tzinfo=timezone.utc) == DUE
        assert updated.tags == []
        assert updated.status == AssignmentStatus.ASSIGNED
        assert updated.description is None

    async def test_assignee_cannot_revise(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)
        with pytest.raises(AuthorizationError):
            await repo.update_assignment(
                assignment.id, AssignmentUpdate(title="Easier"), world.member.id, world.member.role
            )

    async def test_finished_task_is_frozen(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)
        await repo.update_assignment_status(
            assignment.id, AssignmentStatus.COMPLETED, world.member.id, world.member.role
        )
        with pytest.raises(ValidationError):
            await repo.update_assignment(
                assignment.id, AssignmentUpdate(title="Again"), world.volunteer.id, world.volunteer.role
            )

    async def test_title_cannot_be_nulled(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)
        with pytest.raises(ValidationError):
            await repo.update_assignment(
                assignment.id, AssignmentUpdate(title=None), world.volunteer.id, world.volunteer.role
            )

    async def test_unknown_assignment(self, world, repo):
        with pytest.raises(AssignmentNotFoundError):
            await repo.update_assignment(uuid4(), AssignmentUpdate(), world.admin.id, world.admin.role)


class TestDeleteAssignment:
    async def test_assigner_withdraws(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)

        await repo.delete_assignment(assignment.id, world.volunteer.id, world.volunteer.role)

        assert await repo.get_assigned_tasks(world.member.id) == []
        refreshed = await repo.find_by_id(note.id, world.volunteer.id, world.volunteer.role)
        assert refreshed.has_assignments is True

    async def test_assignee_cannot_withdraw(self, world, repo, note):
        assignment = await _assign(repo, note.id, world.volunteer, world.member)
        with pytest.raises(AuthorizationError):
            await repo.delete_assignment(assignment.id, world.member.id, world.member.role)

    async def test_unknown_assignment(self, world, repo):
        with pytest.raises(AssignmentNotFoundError):
            await repo.delete_assignment(uuid4(), world.volunteer.id, world.volunteer.role)
