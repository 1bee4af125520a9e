"""Password hashing adapter."""

from passlib.context import CryptContext


class PasswordHasher:
    """Thin wrapper over a passlib context so services never see raw schemes."""

    def __init__(self, schemes: tuple[str, ...] = ("pbkdf2_sha256",)) -> None:
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self._context.verify(password, password_hash)


__all__ = ["PasswordHasher"]
