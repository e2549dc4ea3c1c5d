from passlib.context import CryptContext

from .config import settings

# -----------------------------------------------------------------------------
# Password hashing (bcrypt via passlib)
# -----------------------------------------------------------------------------
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time check of ``plain`` against a stored bcrypt hash.

    A missing or malformed hash is a mismatch, never an error.
    """
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def dummy_verify() -> None:
    """Spend the same work as a real verify, for lookups that found no user."""
    pwd_context.dummy_verify()
