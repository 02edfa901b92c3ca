"""
Security Utilities

Identity token handling.

Firefly does not authenticate users itself. The identity provider issues a
signed HS256 token carrying the caller's id and role; the API only verifies
the signature and reads the claims.

Identity Token Claims:
======================
    user_id (or sub)  → UUID of the caller
    role              → ADMIN | VOLUNTEER | MEMBER
    exp               → Expiry (optional, enforced when present)

Usage:
======
    from firefly.shared.utils.security import SecurityUtils

    payload = SecurityUtils.decode_identity_token(token, settings.IDENTITY_TOKEN_SECRET)
    user_id, role = payload["user_id"], payload["role"]
"""

from typing import Any

import jwt


class SecurityUtils:
    """Verify identity tokens with PyJWT."""

    @staticmethod
    def decode_identity_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict[str, Any]:
        """
        Verify an identity token and return its claims.

        Raises:
            ValueError: If the token is expired or invalid
        """
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError as e:
            raise ValueError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}") from e
