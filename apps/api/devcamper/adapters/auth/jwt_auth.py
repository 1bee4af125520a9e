"""JWT bearer token verifier."""

from __future__ import annotations

import jwt
from pydantic import ValidationError

from devcamper.adapters.auth.base import AuthVerificationError, TokenVerifier
from devcamper.schemas.auth import AuthPrincipal, Role


class JwtTokenVerifier(TokenVerifier):
    """Verifies signed tokens issued by the account service.

    The identity is read from the ``id`` claim (falling back to ``sub``) and the
    role from ``role``; tokens without a role act as plain users.
    """

    def __init__(self, secret: str | None, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def verify_token(self, token: str) -> AuthPrincipal:
        if not self._secret:
            raise AuthVerificationError("Token verification is not configured")

        try:
            decoded = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthVerificationError("Bearer token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthVerificationError("Invalid bearer token") from exc

        user_id = str(decoded.get("id") or decoded.get("sub") or "").strip()
        if not user_id:
            raise AuthVerificationError("Bearer token missing user identity")

        try:
            return AuthPrincipal(user_id=user_id, role=decoded.get("role") or Role.USER)
        except ValidationError as exc:
            raise AuthVerificationError("Bearer token carries an unknown role") from exc


__all__ = ["JwtTokenVerifier"]
