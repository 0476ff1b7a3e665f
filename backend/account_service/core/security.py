import uuid
from passlib.context import CryptContext

# CryptContext with passlib's hex_md5 scheme: a plain, unsalted MD5 hex digest.
# This is NOT a safe password hash (fast and unsalted, so rainbow tables and
# brute force both work). Stored hashes and test vectors depend on it, so it
# stays until a migration to bcrypt/argon2 is planned.
pwd_context = CryptContext(schemes=["hex_md5"])


def get_password_hash(password: str) -> str:
    """Hash a password to its 32-character lowercase MD5 hex digest"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Recompute the digest of plain_password and compare it to the stored one"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def generate_token() -> str:
    """Opaque session token: a random UUID4 without dashes"""
    return uuid.uuid4().hex
