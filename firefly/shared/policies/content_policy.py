"""
Content Access Policy

Who may do what with a content record.

Policy Table:
=============
    ┌──────────────────┬─────────┬─────────────┬─────────────┐
    │ operation        │ ADMIN   │ VOLUNTEER   │ MEMBER      │
    ├──────────────────┼─────────┼─────────────┼─────────────┤
    │ READ             │ ALLOW   │ CONDITIONAL │ CONDITIONAL │
    │ CREATE_NOTE      │ ALLOW   │ ALLOW       │ ALLOW       │
    │ CREATE_RESOURCE  │ ALLOW   │ ALLOW       │ DENY        │
    │ UPDATE           │ ALLOW   │ CONDITIONAL │ CONDITIONAL │
    │ DELETE           │ ALLOW   │ CONDITIONAL │ CONDITIONAL │
    │ SHARE            │ ALLOW   │ CONDITIONAL │ CONDITIONAL │
    │ ASSIGN           │ ALLOW   │ CONDITIONAL │ DENY        │
    │ CURATE           │ ALLOW   │ DENY        │ DENY        │
    └──────────────────┴─────────┴─────────────┴─────────────┘

CONDITIONAL rules are resolved by the predicates below:

    READ    creator, PUBLIC, FAMILY member, or SHARED with a share row
    UPDATE  creator, or NOTE with allow_editing and a share granting can_edit
    DELETE  creator
    SHARE   creator, a share granting can_share, or a PUBLIC resource
    ASSIGN  volunteer assigning within a family they created

Usage:
======
    actor = await user_repo.get_actor(actor_id, actor_role)
    share = await repo.get_share(content.id, actor.user_id)
    if not check_content_access(content, actor, share):
        return None
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from firefly.shared.core.exceptions import AuthorizationError
from firefly.shared.models.enums import AssignmentStatus, ContentType, UserRole, Visibility


class Rule(str, Enum):
    ALLOW = "ALLOW"
    DENY = "DENY"
    CONDITIONAL = "CONDITIONAL"


class ContentOperation(str, Enum):
    READ = "READ"
    CREATE_NOTE = "CREATE_NOTE"
    CREATE_RESOURCE = "CREATE_RESOURCE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    SHARE = "SHARE"
    ASSIGN = "ASSIGN"
    CURATE = "CURATE"


CONTENT_POLICY: dict[ContentOperation, dict[UserRole, Rule]] = {
    ContentOperation.READ: {
        UserRole.ADMIN: Rule.ALLOW,
        UserRole.VOLUNTEER: Rule.CONDITIONAL,
        UserRole.MEMBER: Rule.CONDITIONAL,
    },
    ContentOperation.CREATE_NOTE: {
        UserRole.ADMIN: Rule.ALLOW,
        UserRole.VOLUNTEER: Rule.ALLOW,
        UserRole.MEMBER: Rule.ALLOW,
    },
    ContentOperation.CREATE_RESOURCE: {
        UserRole.ADMIN: Rule.ALLOW,
        UserRole.VOLUNTEER: Rule.ALLOW,
        UserRole.MEMBER: Rule.DENY,
    },
    ContentOperation.UPDATE: {
        UserRole.ADMIN: Rule.ALLOW,
        UserRole.VOLUNTEER: Rule.CONDITIONAL,
        UserRole.MEMBER: Rule.CONDITIONAL,
    },
    ContentOperation.DELETE: {
        UserRole.ADMIN: Rule.ALLOW,
        UserRole.VOLUNTEER: Rule.CONDITIONAL,
        UserRole.MEMBER: Rule.CONDITIONAL,
    },
    ContentOperation.SHARE: {
        UserRole.ADMIN: Rule.ALLOW,
        UserRole.VOLUNTEER: Rule.CONDITIONAL,
        UserRole.MEMBER: Rule.CONDITIONAL,
    },
    ContentOperation.ASSIGN: {
        UserRole.ADMIN: Rule.ALLOW,
        UserRole.VOLUNTEER: Rule.CONDITIONAL,
        UserRole.MEMBER: Rule.DENY,
    },
    ContentOperation.CURATE: {
        UserRole.ADMIN: Rule.ALLOW,
        UserRole.VOLUNTEER: Rule.DENY,
        UserRole.MEMBER: Rule.DENY,
    },
}


# Assignment lifecycle; terminal states have no outgoing transitions
ALLOWED_ASSIGNMENT_TRANSITIONS: dict[AssignmentStatus, frozenset[AssignmentStatus]] = {
    AssignmentStatus.ASSIGNED: frozenset(
        {AssignmentStatus.IN_PROGRESS, AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED}
    ),
    AssignmentStatus.IN_PROGRESS: frozenset(
        {AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED}
    ),
    AssignmentStatus.COMPLETED: frozenset(),
    AssignmentStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class Actor:
    """
    The facts about the calling user that policy decisions need.

    Attributes:
        user_id: Authenticated user id
        role: Role asserted by the identity provider
        family_id: Family the user belongs to, if any
        created_family_ids: Families the user created (relevant for volunteers)
    """

    user_id: UUID
    role: UserRole
    family_id: Optional[UUID] = None
    created_family_ids: frozenset[UUID] = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def rule_for(operation: ContentOperation, role: UserRole) -> Rule:
    """Look up the table entry; unknown roles are denied."""
    return CONTENT_POLICY[operation].get(role, Rule.DENY)


# ═══════════════════════════════════════════════════════════════════════════════
# PREDICATES
# ═══════════════════════════════════════════════════════════════════════════════


def check_content_access(content: Any, actor: Actor, share: Any = None) -> bool:
    """
    Whether ``actor`` may read ``content``.

    ``share`` is the actor's ContentShare row for this content, or None.
    Checks short-circuit in table order: role, ownership, then visibility.
    """
    if rule_for(ContentOperation.READ, actor.role) is Rule.ALLOW:
        return True
    if content.created_by == actor.user_id:
        return True

    visibility = content.visibility
    if visibility == Visibility.PUBLIC:
        return True
    if visibility == Visibility.FAMILY:
        return (
            content.family_id is not None
            and actor.family_id is not None
            and content.family_id == actor.family_id
        )
    if visibility == Visibility.SHARED:
        return share is not None
    return False


def ensure_can_create(content_type: ContentType, actor: Actor) -> None:
    """Raise AuthorizationError if the role may not create this content type."""
    operation = (
        ContentOperation.CREATE_RESOURCE
        if content_type == ContentType.RESOURCE
        else ContentOperation.CREATE_NOTE
    )
    if rule_for(operation, actor.role) is Rule.DENY:
        raise AuthorizationError(
            "Members cannot submit resources",
            details={"role": actor.role.value, "content_type": content_type.value},
        )


def can_update(content: Any, actor: Actor, share: Any = None) -> bool:
    """
    Whether ``actor`` may modify ``content``.

    Share edit rights only count on notes that allow editing.
    """
    if rule_for(ContentOperation.UPDATE, actor.role) is Rule.ALLOW:
        return True
    if content.created_by == actor.user_id:
        return True
    if content.content_type == ContentType.NOTE and getattr(content, "allow_editing", False):
        return bool(share is not None and share.can_edit)
    return False


def can_delete(content: Any, actor: Actor) -> bool:
    """Admins and the creator may delete."""
    if rule_for(ContentOperation.DELETE, actor.role) is Rule.ALLOW:
        return True
    return content.created_by == actor.user_id


def can_share_content(content: Any, actor: Actor, share: Any = None) -> bool:
    """
    Whether ``actor`` may hand ``content`` to another user.

    Read access alone never suffices. Resource shares carry no permission
    bits, so anyone who can read a PUBLIC resource may pass it on.
    """
    if rule_for(ContentOperation.SHARE, actor.role) is Rule.ALLOW:
        return True
    if content.created_by == actor.user_id:
        return True
    if content.content_type == ContentType.RESOURCE and content.visibility == Visibility.PUBLIC:
        return True
    return bool(share is not None and share.can_share)


def ensure_can_assign(actor: Actor, assignee_family_id: Optional[UUID]) -> None:
    """
    Raise AuthorizationError unless ``actor`` may assign a task to a member
    of ``assignee_family_id``.

    Volunteers are limited to families they created; members never assign.
    """
    rule = rule_for(ContentOperation.ASSIGN, actor.role)
    if rule is Rule.ALLOW:
        return
    if rule is Rule.CONDITIONAL:
        if assignee_family_id is not None and assignee_family_id in actor.created_family_ids:
            return
        raise AuthorizationError(
            "Volunteers can only assign tasks to members of families they created",
            details={"assignee_family_id": str(assignee_family_id) if assignee_family_id else None},
        )
    raise AuthorizationError("Insufficient permissions to assign tasks")


def ensure_can_curate(actor: Actor) -> None:
    """Raise AuthorizationError unless ``actor`` may approve or feature resources."""
    if rule_for(ContentOperation.CURATE, actor.role) is not Rule.ALLOW:
        raise AuthorizationError("Only administrators can curate resources")


def can_update_assignment(assignment: Any, actor: Actor, admin_override: bool = False) -> bool:
    """Only the assignee or the assigner may move an assignment along."""
    if admin_override and actor.is_admin:
        return True
    return actor.user_id in (assignment.assigned_to, assignment.assigned_by)


def can_manage_assignment(assignment: Any, actor: Actor, admin_override: bool = False) -> bool:
    """Only the assigner may revise or withdraw a task."""
    if admin_override and actor.is_admin:
        return True
    return actor.user_id == assignment.assigned_by


def can_transition_assignment(current: AssignmentStatus, target: AssignmentStatus) -> bool:
    return target in ALLOWED_ASSIGNMENT_TRANSITIONS.get(current, frozenset())
