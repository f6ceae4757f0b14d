"""
Authentication module for the docquery service.

This module verifies bearer access tokens and enforces roles.
"""

from .require import (
    get_settings,
    require_auth,
    require_roles_access,
)

__all__ = [
    "get_settings",
    "require_auth",
    "require_roles_access",
]
