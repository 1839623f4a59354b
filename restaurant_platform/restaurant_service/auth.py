"""
Token verification and identity resolution for protected routes.

Two dependencies run in order on every protected request:

- ``jwt_check`` verifies the bearer token against the identity provider's
  signing keys, audience, issuer and algorithm.
- ``jwt_parse`` reads the subject claim from the token and maps it to a
  local user.

``require_auth`` chains both and hands the route an ``AuthContext``.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
import logging

from fastapi import Depends, Header
from sqlalchemy.orm import Session
import jwt

from .config import settings
from .db import get_db
from .errors import UnauthorizedError
from .models import User

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
# The provider signs with a single asymmetric scheme
TOKEN_SIGNING_ALG = "RS256"


@dataclass(frozen=True)
class AuthContext:
    auth0_id: str
    user_id: str


class TokenVerifier:
    """
    Verifies provider-issued access tokens.

    Signing keys are resolved per token through a JWKS client, so key
    rotation at the provider needs no restart.
    """

    def __init__(self, audience: str, issuer: str, jwks_client=None, jwks_url: str = None):
        self.audience = audience
        self.issuer = issuer
        self._jwks_client = jwks_client or jwt.PyJWKClient(jwks_url)

    def verify(self, token: str) -> dict:
        """
        Return the verified claims.

        Raises:
            jwt.PyJWTError: If the key cannot be resolved or any check fails
        """
        signing_key = self._jwks_client.get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=[TOKEN_SIGNING_ALG],
            audience=self.audience,
            issuer=self.issuer,
        )


def validate_auth_settings() -> None:
    """
    Fail startup when the identity provider is not configured.

    Raises:
        RuntimeError: If the audience or issuer base URL is missing
    """
    if not settings.auth0_configured:
        raise RuntimeError("AUTH0_AUDIENCE and AUTH0_ISSUER_BASE_URL must be set")


@lru_cache(maxsize=1)
def _build_token_verifier() -> TokenVerifier:
    return TokenVerifier(
        audience=settings.AUTH0_AUDIENCE,
        issuer=settings.auth0_issuer,
        jwks_url=settings.auth0_jwks_url,
    )


def get_token_verifier() -> TokenVerifier:
    if not settings.auth0_configured:
        logger.error("Identity provider is not configured; rejecting token")
        raise UnauthorizedError("Authentication is not configured")
    return _build_token_verifier()


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError("Missing bearer token")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise UnauthorizedError("Missing bearer token")
    return token


def jwt_check(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> dict:
    token = bearer_token(authorization)
    try:
        return verifier.verify(token)
    except jwt.PyJWTError as exc:
        logger.warning(f"Token verification failed: {type(exc).__name__}")
        raise UnauthorizedError("Invalid token") from exc


def jwt_parse(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db),
) -> AuthContext:
    """
    Resolve the token subject to a local user.

    The payload is decoded without checking the signature; ``jwt_check``
    owns verification.
    """
    token = bearer_token(authorization)
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as exc:
        logger.warning(f"Token could not be decoded: {type(exc).__name__}")
        raise UnauthorizedError("Invalid token") from exc

    auth0_id = payload.get("sub")
    if not auth0_id or not isinstance(auth0_id, str):
        logger.warning("Token has no subject claim")
        raise UnauthorizedError("Invalid token")

    user = db.query(User).filter(User.auth0_id == auth0_id).first()
    if not user:
        logger.warning(f"No local user for subject {auth0_id}")
        raise UnauthorizedError("User not found")

    return AuthContext(auth0_id=auth0_id, user_id=str(user.id))


def require_auth(
    _claims: dict = Depends(jwt_check),
    context: AuthContext = Depends(jwt_parse),
) -> AuthContext:
    return context
