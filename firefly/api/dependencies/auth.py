"""
Authentication Dependencies

FastAPI dependencies that turn the identity provider's bearer token into
the (actor_id, actor_role) pair every repository call takes.

Dependency Hierarchy:
=====================
    get_identity_token()  ← Extract and verify the JWT from the header
           │
           ▼
    get_current_actor()   ← Read user_id/sub and role claims

Type Aliases:
=============
    CurrentActor - Authenticated caller

Usage:
======
    from firefly.api.dependencies.auth import CurrentActor

    @router.get("/content/{content_id}")
    async def get_content(content_id: UUID, actor: CurrentActor, db: DbSession):
        repo = ContentRepository(db)
        return await repo.find_by_id(content_id, actor.user_id, actor.role)
"""

from dataclasses import dataclass
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from firefly.config.settings import settings
from firefly.shared.core.exceptions import AuthenticationError
from firefly.shared.core.logging import clear_log_context, log_context
from firefly.shared.models.enums import UserRole
from firefly.shared.utils.security import SecurityUtils


# auto_error=False so a missing header surfaces as our 401, not FastAPI's 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedActor:
    """Caller identity as asserted by the identity provider."""

    user_id: UUID
    role: UserRole


async def get_identity_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict:
    """
    Extract and verify the identity token from the Authorization header.

    Raises:
        AuthenticationError: If the token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_identity_token(
            credentials.credentials,
            settings.IDENTITY_TOKEN_SECRET,
            settings.IDENTITY_TOKEN_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def get_current_actor(
    token: Annotated[dict, Depends(get_identity_token)],
) -> AuthenticatedActor:
    """
    Build the caller from token claims.

    Raises:
        AuthenticationError: If user_id/sub or role is missing or malformed
    """
    raw_user_id = token.get("user_id") or token.get("sub")
    raw_role = token.get("role")

    if not raw_user_id or not raw_role:
        raise AuthenticationError("Invalid token payload")

    try:
        actor = AuthenticatedActor(user_id=UUID(str(raw_user_id)), role=UserRole(raw_role))
    except ValueError as e:
        raise AuthenticationError("Invalid token payload") from e

    # Every log line of this request carries the caller
    clear_log_context()
    log_context(actor_id=str(actor.user_id), role=actor.role.value)
    return actor


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentActor = Annotated[AuthenticatedActor, Depends(get_current_actor)]
