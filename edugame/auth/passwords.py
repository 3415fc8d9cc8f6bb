import hmac

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (UnknownHashError, ValueError):
        return False


def secrets_match(supplied: str, expected: str) -> bool:
    """Constant-time comparison for secrets that are configured, not stored."""
    return hmac.compare_digest((supplied or "").encode("utf-8"), expected.encode("utf-8"))
