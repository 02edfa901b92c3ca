"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Identity token verification

Usage:
======
    from firefly.shared.utils.security import SecurityUtils
"""

from firefly.shared.utils.security import SecurityUtils

__all__ = [
    "SecurityUtils",
]
