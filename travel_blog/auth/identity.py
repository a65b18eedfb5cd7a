import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from travel_blog.config import Settings
from travel_blog.exceptions import InvalidToken

logger = logging.getLogger(__name__)


class AuthenticatedUser(BaseModel):
    """Identity claims of a verified bearer token"""
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None


class IdentityVerifier:
    """
    Verifies bearer identity tokens issued by the identity provider.

    Tokens are JWTs whose audience is the project id and whose issuer is
    `<issuer prefix><project id>`. With `identity_public_key_path` set, the
    PEM at that path verifies asymmetric signatures; otherwise the shared
    secret does.
    """

    def __init__(self, settings: Settings):
        self.algorithm = settings.identity_algorithm
        self.audience = settings.identity_project_id
        self.issuer = f"{settings.identity_issuer_prefix}{settings.identity_project_id}"
        self.token_ttl = timedelta(minutes=settings.identity_token_ttl_minutes)
        self.secret_key = settings.identity_secret_key

        if settings.identity_public_key_path:
            self.verification_key = Path(settings.identity_public_key_path).read_text()
        else:
            self.verification_key = settings.identity_secret_key

    def verify(self, token: str) -> AuthenticatedUser:
        """Decode and validate a token, raising InvalidToken on any failure"""
        try:
            claims = jwt.decode(
                token,
                self.verification_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
        except JWTError as e:
            logger.info(f"Rejected identity token: {e}")
            raise InvalidToken()

        uid = claims.get("sub") or claims.get("user_id")
        if not uid:
            raise InvalidToken("Identity token has no subject")

        try:
            return AuthenticatedUser(
                uid=str(uid),
                email=claims.get("email"),
                name=claims.get("name"),
            )
        except ValidationError:
            raise InvalidToken("Identity token has malformed claims")

    def issue_token(
        self,
        uid: str,
        email: Optional[str] = None,
        name: Optional[str] = None,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a token in the provider's format, for development and tests"""
        if self.verification_key != self.secret_key:
            raise RuntimeError("Issuing tokens requires the shared-secret configuration")

        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": uid,
            "user_id": uid,
            "aud": self.audience,
            "iss": self.issuer,
            "iat": now,
            "exp": now + (expires_delta if expires_delta is not None else self.token_ttl),
        }
        if email:
            to_encode["email"] = email
        if name:
            to_encode["name"] = name

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
