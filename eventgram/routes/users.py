"""API routes for user registration and profiles."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from eventgram.auth.dependencies import get_current_identity, get_optional_identity
from eventgram.models.identity import Identity
from eventgram.schemas.common import OkResponse
from eventgram.schemas.post import PostListResponse, PostResponse
from eventgram.schemas.user import UserData, UserRequest, UserResponse
from eventgram.services.post_service import PostService
from eventgram.services.user_service import UserService

router = APIRouter(prefix="/u", tags=["Users"])

_ERROR_RESPONSES = {
    403: {"description": "Not signed in, private profile, or another user"},
    404: {"description": "User not found"},
    409: {
        "description": "Username taken or already registered",
        "content": {
            "application/json": {
                "example": {
                    "status": "error",
                    "error_code": "CONFLICT",
                    "message": "Sorry, the username 'harbourfan' is already taken!",
                    "details": {},
                }
            }
        },
    },
}


def _viewer_id(identity: Optional[Identity]) -> Optional[str]:
    return identity.identity_id if identity is not None else None


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def register_user(
    user_request: UserRequest,
    identity: Identity = Depends(get_current_identity),
) -> UserResponse:
    """
    Register the signed-in caller under a unique username.

    Raises:
        NotSignedInError: If no credentials were sent (403)
        ConflictError: If already registered or the username is taken (409)
    """
    service = UserService()
    user = await service.register(identity, user_request)
    return UserResponse(data=UserData.from_user(user))


@router.get("/{username}", response_model=UserResponse, responses=_ERROR_RESPONSES)
async def get_user(
    username: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> UserResponse:
    """
    Retrieve a user profile. Private profiles are visible to their owner only.
    """
    service = UserService()
    user = await service.get(username, _viewer_id(identity))
    return UserResponse(data=UserData.from_user(user))


@router.put("/{username}", response_model=UserResponse, responses=_ERROR_RESPONSES)
async def update_user(
    username: str,
    user_request: UserRequest,
    identity: Identity = Depends(get_current_identity),
) -> UserResponse:
    """Update the caller's own profile, including renaming it."""
    service = UserService()
    user = await service.update(identity, username, user_request)
    return UserResponse(data=UserData.from_user(user))


@router.delete("/{username}", response_model=OkResponse, responses=_ERROR_RESPONSES)
async def delete_user(
    username: str,
    identity: Identity = Depends(get_current_identity),
) -> OkResponse:
    """Delete the caller's own user record."""
    service = UserService()
    await service.delete(identity, username)
    return OkResponse()


@router.get(
    "/{username}/posts", response_model=PostListResponse, responses=_ERROR_RESPONSES
)
async def list_user_posts(
    username: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> PostListResponse:
    """List a user's newest posts."""
    service = PostService()
    posts = await service.list_for_user(username, _viewer_id(identity))
    return PostListResponse(posts=[PostResponse.from_post(post) for post in posts])
