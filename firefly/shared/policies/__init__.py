"""
Access-control policies.

Pure predicates over already-loaded facts. Nothing in this package touches
the database; repositories gather the facts and ask.
"""

from firefly.shared.policies.content_policy import (
    ALLOWED_ASSIGNMENT_TRANSITIONS,
    CONTENT_POLICY,
    Actor,
    ContentOperation,
    Rule,
    can_delete,
    can_transition_assignment,
    can_update,
    can_update_assignment,
    check_content_access,
    ensure_can_assign,
    ensure_can_create,
    ensure_can_curate,
    rule_for,
)

__all__ = [
    "ALLOWED_ASSIGNMENT_TRANSITIONS",
    "CONTENT_POLICY",
    "Actor",
    "ContentOperation",
    "Rule",
    "can_delete",
    "can_transition_assignment",
    "can_update",
    "can_update_assignment",
    "check_content_access",
    "ensure_can_assign",
    "ensure_can_create",
    "ensure_can_curate",
    "rule_for",
]
