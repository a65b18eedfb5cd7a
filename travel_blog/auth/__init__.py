from travel_blog.auth.identity import AuthenticatedUser, IdentityVerifier
from travel_blog.auth.dependencies import get_current_user

__all__ = [
    "AuthenticatedUser",
    "IdentityVerifier",
    "get_current_user",
]
