from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from travel_blog.auth.identity import AuthenticatedUser, IdentityVerifier
from travel_blog.exceptions import AuthenticationRequired

# auto_error is off so a missing header maps to our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> AuthenticatedUser:
    """Resolve the caller from the `Authorization: Bearer <token>` header"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequired()

    return verifier.verify(credentials.credentials)
