"""FastAPI dependencies resolving the caller's identity.

The caller is resolved once per request and passed explicitly to the
services; nothing is stashed on module state.
"""

from fastapi import Depends, Header, Request

from eventgram.auth.credentials import split_token, verify_secret
from eventgram.exceptions import NotRegisteredError, NotSignedInError
from eventgram.logging.config import get_logger
from eventgram.models.identity import Identity
from eventgram.models.user import AppUser
from eventgram.repositories.identity_repository import IdentityRepository
from eventgram.repositories.user_repository import UserRepository
from eventgram.utils.clock import utc_now

logger = get_logger(__name__)


def get_token_from_header(authorization: str | None) -> str | None:
    """
    Extract the bearer token from an Authorization header.

    Args:
        authorization: Authorization header value

    Returns:
        The token, or None if the header is missing or malformed
    """
    if not authorization:
        return None

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]


async def resolve_identity(token: str, repo: IdentityRepository) -> Identity | None:
    """
    Look up and verify a bearer token.

    Args:
        token: Bearer token "<key_id>.<secret>"
        repo: IdentityRepository instance

    Returns:
        Active Identity if the token is valid, None otherwise
    """
    parts = split_token(token)
    if parts is None:
        return None

    key_id, secret = parts
    identity = await repo.get_by_key_id(key_id)
    if identity is None or not identity.is_active:
        return None

    if not verify_secret(secret, identity.key_hash):
        return None

    await repo.touch(key_id, utc_now().isoformat())
    return identity


async def get_optional_identity(
    request: Request,
    authorization: str | None = Header(None),
) -> Identity | None:
    """
    Resolve the caller if credentials were sent.

    Used by read endpoints where anonymous access is allowed.
    """
    token = get_token_from_header(authorization)
    if token is None:
        return None

    identity = await resolve_identity(token, IdentityRepository())
    if identity is not None:
        request.state.identity_id = identity.identity_id
    return identity


async def get_current_identity(
    identity: Identity | None = Depends(get_optional_identity),
) -> Identity:
    """
    Require a signed-in caller.

    Raises:
        NotSignedInError: If no valid credentials were sent
    """
    if identity is None:
        raise NotSignedInError(
            details={"hint": "Include 'Authorization: Bearer <token>'"},
        )
    return identity


async def require_registered_user(
    identity: Identity = Depends(get_current_identity),
) -> AppUser:
    """
    Require a signed-in caller with a registered user record.

    Raises:
        NotSignedInError: If no valid credentials were sent
        NotRegisteredError: If the identity has no user record
    """
    user = await UserRepository().get(identity.identity_id)
    if user is None:
        logger.info(
            "Caller is not a registered user",
            extra={"context": {"identity_id": identity.identity_id}},
        )
        raise NotRegisteredError()
    return user
