from datetime import datetime, timedelta
from typing import Optional
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError
from jose import JWTError, jwt
from config import settings
import secrets

ph = PasswordHasher(
    time_cost=settings.password_hash_time_cost,
    memory_cost=settings.password_hash_memory_cost,
    parallelism=4,
    hash_len=32,
    salt_len=16
)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its peppered Argon2 hash"""
    if not plain_password or not hashed_password:
        return False
    try:
        return ph.verify(hashed_password, plain_password + settings.password_pepper)
    except (VerificationError, InvalidHash):
        return False

def get_password_hash(password: str) -> str:
    """Hash a password using Argon2id with pepper"""
    return ph.hash(password + settings.password_pepper)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token"""
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    now = datetime.utcnow()

    to_encode.update({
        "exp": now + expires_delta,
        "iat": now,
        "type": "access",
        "jti": secrets.token_urlsafe(16)
    })
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate an access token, None when invalid or expired"""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    if payload.get("type") != "access":
        return None
    return payload

def mask_sensitive_data(data: str, visible_chars: int = 4) -> str:
    """Mask sensitive data for logging"""
    if not data or len(data) <= visible_chars:
        return '*' * len(data) if data else ''
    return data[:visible_chars] + '*' * (len(data) - visible_chars)
