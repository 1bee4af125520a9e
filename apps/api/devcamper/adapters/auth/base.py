"""Token verification seam between the HTTP layer and an identity provider."""

from abc import ABC, abstractmethod

from devcamper.schemas.auth import AuthPrincipal


class AuthVerificationError(Exception):
    """The bearer token or cookie did not yield a usable principal."""


class TokenVerifier(ABC):
    """Turns a raw API token into the caller's id and role."""

    @abstractmethod
    def verify_token(self, token: str) -> AuthPrincipal:
        """Return the principal for ``token`` or raise ``AuthVerificationError``."""


__all__ = ["AuthVerificationError", "TokenVerifier"]
