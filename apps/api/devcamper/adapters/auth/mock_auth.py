"""Mock auth verifier for local development and tests."""

from pydantic import ValidationError

from devcamper.adapters.auth.base import AuthVerificationError, TokenVerifier
from devcamper.schemas.auth import AuthPrincipal, Role


class MockTokenVerifier(TokenVerifier):
    """Accepts deterministic test tokens only.

    Expected token format:
    - ``test:<user_id>`` (role ``user``)
    - ``test:<user_id>:<role>`` where role is ``user``, ``publisher`` or ``admin``
    """

    def verify_token(self, token: str) -> AuthPrincipal:
        parts = token.split(":")
        if len(parts) not in (2, 3) or parts[0] != "test":
            raise AuthVerificationError("Invalid bearer token")

        user_id = parts[1].strip()
        role = parts[2].strip() if len(parts) == 3 else Role.USER.value

        if not user_id:
            raise AuthVerificationError("Bearer token missing user identity")

        try:
            return AuthPrincipal(user_id=user_id, role=role)
        except ValidationError as exc:
            raise AuthVerificationError("Bearer token carries an unknown role") from exc


__all__ = ["MockTokenVerifier"]
