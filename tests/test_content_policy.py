"""Tests for the content access-control predicates."""

from types import SimpleNamespace
from uuid import uuid4

import pytest

from firefly.shared.core.exceptions import AuthorizationError
from firefly.shared.models.enums import AssignmentStatus, ContentType, UserRole, Visibility
from firefly.shared.policies.content_policy import (
    CONTENT_POLICY,
    Actor,
    ContentOperation,
    Rule,
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
    rule_for,
)


def _content(**overrides):
    fields = dict(
        created_by=uuid4(),
        visibility=Visibility.PRIVATE,
        family_id=None,
        content_type=ContentType.NOTE,
        allow_editing=False,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestPolicyTable:
    def test_every_operation_covers_every_role(self):
        for operation in ContentOperation:
            assert set(CONTENT_POLICY[operation]) == set(UserRole)

    def test_only_admins_curate(self):
        assert rule_for(ContentOperation.CURATE, UserRole.ADMIN) is Rule.ALLOW
        assert rule_for(ContentOperation.CURATE, UserRole.VOLUNTEER) is Rule.DENY
        assert rule_for(ContentOperation.CURATE, UserRole.MEMBER) is Rule.DENY

    def test_members_cannot_assign_or_submit_resources(self):
        assert rule_for(ContentOperation.ASSIGN, UserRole.MEMBER) is Rule.DENY
        assert rule_for(ContentOperation.CREATE_RESOURCE, UserRole.MEMBER) is Rule.DENY


class TestContentAccess:
    def test_private_hidden_from_other_members(self):
        actor = Actor(uuid4(), UserRole.MEMBER)
        assert check_content_access(_content(), actor) is False

    def test_private_visible_to_creator(self):
        actor = Actor(uuid4(), UserRole.MEMBER)
        assert check_content_access(_content(created_by=actor.user_id), actor) is True

    def test_admin_sees_everything(self):
        assert check_content_access(_content(), Actor(uuid4(), UserRole.ADMIN)) is True

    def test_public_visible_to_anyone(self):
        actor = Actor(uuid4(), UserRole.VOLUNTEER)
        assert check_content_access(_content(visibility=Visibility.PUBLIC), actor) is True

    def test_family_requires_matching_family(self):
        family_id = uuid4()
        content = _content(visibility=Visibility.FAMILY, family_id=family_id)
        assert check_content_access(content, Actor(uuid4(), UserRole.MEMBER, family_id=family_id))
        assert not check_content_access(content, Actor(uuid4(), UserRole.MEMBER, family_id=uuid4()))
        assert not check_content_access(content, Actor(uuid4(), UserRole.MEMBER))

    def test_family_content_without_family_is_hidden(self):
        content = _content(visibility=Visibility.FAMILY, family_id=None)
        assert not check_content_access(content, Actor(uuid4(), UserRole.MEMBER))

    def test_shared_requires_share(self):
        content = _content(visibility=Visibility.SHARED)
        actor = Actor(uuid4(), UserRole.MEMBER)
        assert check_content_access(content, actor) is False
        assert check_content_access(content, actor, share=SimpleNamespace(can_edit=False)) is True


class TestMutationPredicates:
    def test_creator_may_update_and_delete(self):
        actor = Actor(uuid4(), UserRole.MEMBER)
        content = _content(created_by=actor.user_id)
        assert can_update(content, actor)
        assert can_delete(content, actor)

    def test_share_edit_counts_only_on_editable_notes(self):
        actor = Actor(uuid4(), UserRole.MEMBER)
        share = SimpleNamespace(can_edit=True)
        assert can_update(_content(allow_editing=True), actor, share)
        assert not can_update(_content(allow_editing=False), actor, share)
        assert not can_update(_content(allow_editing=True), actor, SimpleNamespace(can_edit=False))

    def test_share_edit_ignored_for_resources(self):
        actor = Actor(uuid4(), UserRole.VOLUNTEER)
        resource = _content(content_type=ContentType.RESOURCE, allow_editing=True)
        assert not can_update(resource, actor, SimpleNamespace(can_edit=True))

    def test_non_creator_cannot_delete(self):
        assert not can_delete(_content(), Actor(uuid4(), UserRole.VOLUNTEER))
        assert can_delete(_content(), Actor(uuid4(), UserRole.ADMIN))

    def test_reader_cannot_share(self):
        actor = Actor(uuid4(), UserRole.MEMBER)
        assert not can_share_content(_content(visibility=Visibility.PUBLIC), actor)
        assert not can_share_content(_content(), actor, SimpleNamespace(can_share=False))

    def test_share_permission_bit(self):
        actor = Actor(uuid4(), UserRole.MEMBER)
        assert can_share_content(_content(), actor, SimpleNamespace(can_share=True))

    def test_creator_and_admin_share(self):
        creator = uuid4()
        assert can_share_content(_content(created_by=creator), Actor(creator, UserRole.MEMBER))
        assert can_share_content(_content(), Actor(uuid4(), UserRole.ADMIN))

    def test_public_resources_pass_on_freely(self):
        actor = Actor(uuid4(), UserRole.MEMBER)
        public = _content(content_type=ContentType.RESOURCE, visibility=Visibility.PUBLIC)
        family = _content(content_type=ContentType.RESOURCE, visibility=Visibility.FAMILY)
        assert can_share_content(public, actor)
        assert not can_share_content(family, actor, SimpleNamespace(can_share=None))


class TestEnsure:
    def test_member_cannot_create_resource(self):
        with pytest.raises(AuthorizationError, match="Members cannot submit resources"):
            ensure_can_create(ContentType.RESOURCE, Actor(uuid4(), UserRole.MEMBER))

    def test_member_can_create_note(self):
        ensure_can_create(ContentType.NOTE, Actor(uuid4(), UserRole.MEMBER))

    def test_volunteer_assigns_only_inside_created_families(self):
        family_id = uuid4()
        volunteer = Actor(uuid4(), UserRole.VOLUNTEER, created_family_ids=frozenset({family_id}))
        ensure_can_assign(volunteer, family_id)
        with pytest.raises(AuthorizationError):
            ensure_can_assign(volunteer, uuid4())
        with pytest.raises(AuthorizationError):
            ensure_can_assign(volunteer, None)

    def test_member_never_assigns(self):
        family_id = uuid4()
        member = Actor(uuid4(), UserRole.MEMBER, created_family_ids=frozenset({family_id}))
        with pytest.raises(AuthorizationError):
            ensure_can_assign(member, family_id)

    def test_admin_assigns_anywhere(self):
        ensure_can_assign(Actor(uuid4(), UserRole.ADMIN), None)

    def test_curation_is_admin_only(self):
        ensure_can_curate(Actor(uuid4(), UserRole.ADMIN))
        with pytest.raises(AuthorizationError):
            ensure_can_curate(Actor(uuid4(), UserRole.VOLUNTEER))


class TestAssignmentPredicates:
    def test_only_assignee_or_assigner(self):
        assignment = SimpleNamespace(assigned_to=uuid4(), assigned_by=uuid4())
        assert can_update_assignment(assignment, Actor(assignment.assigned_to, UserRole.MEMBER))
        assert can_update_assignment(assignment, Actor(assignment.assigned_by, UserRole.VOLUNTEER))
        assert not can_update_assignment(assignment, Actor(uuid4(), UserRole.ADMIN))

    def test_admin_override(self):
        assignment = SimpleNamespace(assigned_to=uuid4(), assigned_by=uuid4())
        admin = Actor(uuid4(), UserRole.ADMIN)
        assert can_update_assignment(assignment, admin, admin_override=True)
        assert not can_update_assignment(assignment, Actor(uuid4(), UserRole.MEMBER), admin_override=True)

    def test_only_assigner_manages(self):
        assignment = SimpleNamespace(assigned_to=uuid4(), assigned_by=uuid4())
        assert can_manage_assignment(assignment, Actor(assignment.assigned_by, UserRole.VOLUNTEER))
        assert not can_manage_assignment(assignment, Actor(assignment.assigned_to, UserRole.MEMBER))
        assert not can_manage_assignment(assignment, Actor(uuid4(), UserRole.ADMIN))
        assert can_manage_assignment(assignment, Actor(uuid4(), UserRole.ADMIN), admin_override=True)

    @pytest.mark.parametrize(
        "current,target,allowed",
        [
            (AssignmentStatus.ASSIGNED, AssignmentStatus.IN_PROGRESS, True),
            (AssignmentStatus.ASSIGNED, AssignmentStatus.COMPLETED, True),
            (AssignmentStatus.IN_PROGRESS, AssignmentStatus.CANCELLED, True),
            (AssignmentStatus.IN_PROGRESS, AssignmentStatus.ASSIGNED, False),
            (AssignmentStatus.COMPLETED, AssignmentStatus.IN_PROGRESS, False),
            (AssignmentStatus.CANCELLED, AssignmentStatus.ASSIGNED, False),
            (AssignmentStatus.ASSIGNED, AssignmentStatus.ASSIGNED, False),
        ],
    )
    def test_transitions(self, current, target, allowed):
        assert can_transition_assignment(current, target) is allowed
