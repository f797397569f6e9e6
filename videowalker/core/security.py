from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from videowalker.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt limits the secret to 72 bytes
_BCRYPT_MAX_BYTES = 72

ADMIN_SUBJECT_PREFIX = "admin:"


def _password_too_long(password: str) -> bool:
    return len((password or "").encode("utf-8")) > _BCRYPT_MAX_BYTES


def hash_password(password: str) -> str:
    if _password_too_long(password):
        raise ValueError("Password too long for bcrypt (max 72 bytes).")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if _password_too_long(plain_password):
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # malformed or unknown hash
        return False


def create_access_token(
    subject: str,
    expires_minutes: Optional[int] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    now = datetime.now(timezone.utc)
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    exp = now + timedelta(minutes=minutes)

    payload: Dict[str, Any] = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }

    if extra:
        payload.update(extra)

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Raises JWTError when the token is invalid or expired."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def parse_admin_subject(sub: str) -> int:
    """
    Expected subject: "admin:{id}".
    Raises JWTError for anything else.
    """
    s = (sub or "").strip()
    if not s.startswith(ADMIN_SUBJECT_PREFIX):
        raise JWTError("invalid subject")
    try:
        return int(s[len(ADMIN_SUBJECT_PREFIX):])
    except ValueError:
        raise JWTError("invalid subject")
