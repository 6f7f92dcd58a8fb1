import uuid
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError
from .config import SECRET_KEY, ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, JWT_ISSUER, JWT_AUDIENCE
from datetime import timedelta, datetime, timezone
from jose import jwt

ph = PasswordHasher()


def hash_access_code(access_code: str) -> str:
    return ph.hash(access_code)


def verify_access_code(access_code: str, hashed_access_code: str) -> bool:
    try:
        return ph.verify(hashed_access_code, access_code)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def create_access_token(subject: str, *, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    expire = now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "nbf": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "jti": str(uuid.uuid4()),
        "typ": "access",
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)
