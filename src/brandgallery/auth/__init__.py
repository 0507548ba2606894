"""Session authentication for Brand Gallery.

This module handles:
- Credential checks for the admin and boss accounts
- Session cookie login/logout
- Role-based access control on endpoints
"""

from brandgallery.auth.dependencies import (
    SessionUser,
    authenticate,
    get_current_user,
    get_optional_user,
    require_role,
)

__all__ = [
    "SessionUser",
    "authenticate",
    "get_current_user",
    "get_optional_user",
    "require_role",
]
