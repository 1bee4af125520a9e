"""Auth verifier adapters."""

from .base import AuthVerificationError, TokenVerifier
from .jwt_auth import JwtTokenVerifier
from .mock_auth import MockTokenVerifier
from .passwords import PasswordHasher

__all__ = [
    "AuthVerificationError",
    "TokenVerifier",
    "JwtTokenVerifier",
    "MockTokenVerifier",
    "PasswordHasher",
]
