"""Access credential generation, hashing and verification."""

import secrets
import uuid

import bcrypt

TOKEN_SEPARATOR = "."


def hash_secret(secret: str) -> str:
    """
    Hash a credential secret using bcrypt.

    Args:
        secret: Plain text secret to hash

    Returns:
        Bcrypt hash of the secret
    """
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(secret.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_secret(secret: str, secret_hash: str) -> bool:
    """
    Verify a credential secret against its hash.

    Args:
        secret: Plain text secret to verify
        secret_hash: Bcrypt hash to verify against

    Returns:
        True if the secret matches the hash, False otherwise
    """
    try:
        return bcrypt.checkpw(secret.encode("utf-8"), secret_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def generate_credential() -> tuple[str, str]:
    """
    Generate a new credential.

    Returns:
        Tuple of (key_id, secret). The bearer token is "<key_id>.<secret>".
    """
    key_id = uuid.uuid4().hex
    secret = secrets.token_urlsafe(32)
    return key_id, secret


def build_token(key_id: str, secret: str) -> str:
    return f"{key_id}{TOKEN_SEPARATOR}{secret}"


def split_token(token: str) -> tuple[str, str] | None:
    """
    Split a bearer token into key_id and secret.

    Returns:
        Tuple of (key_id, secret), or None if the token is malformed
    """
    key_id, sep, secret = token.partition(TOKEN_SEPARATOR)
    if not sep or not key_id or not secret:
        return None
    return key_id, secret
