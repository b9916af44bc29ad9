# /luct-portal/app/core/security.py

"""
Cryptographic helpers: password hashing and JWT bearer tokens.

Tokens carry the caller's `id`, `role` and `name` so that most endpoints can
authorize a request without touching the database. There is no revocation
list; a token stays valid until its `exp` claim, even if the user record
changes in the meantime.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from .config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_DAYS
from .exceptions import AuthenticationFailed

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: str,
    role: str,
    name: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {"sub": subject, "id": subject, "role": role, "name": name, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationFailed("Token has expired. Please log in again.")
    except JWTError:
        raise AuthenticationFailed("Could not validate credentials.")
