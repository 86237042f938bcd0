"""API routes for post operations."""

from fastapi import APIRouter, Depends, File, UploadFile, status

from eventgram.auth.dependencies import require_registered_user
from eventgram.models.user import AppUser
from eventgram.schemas.common import CreatedResponse, OkResponse
from eventgram.schemas.post import PostRequest, PostResponse, PostView
from eventgram.services.post_service import PostService

router = APIRouter(prefix="/p", tags=["Posts"])

_ERROR_RESPONSES = {
    400: {
        "description": "Validation error or unknown event",
        "content": {
            "application/json": {
                "example": {
                    "status": "error",
                    "error_code": "UNKNOWN_EVENT",
                    "message": "Could not find the event for this post.",
                    "details": {"event_id": "5a1c3e9f0b2d7"},
                }
            }
        },
    },
    403: {
        "description": "Not allowed, or the event is not active",
        "content": {
            "application/json": {
                "example": {
                    "status": "error",
                    "error_code": "EVENT_INACTIVE",
                    "message": "Cannot post to an inactive event.",
                    "details": {"event_id": "5a1c3e9f0b2d7"},
                }
            }
        },
    },
    404: {"description": "Post not found"},
}


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_post(
    post_request: PostRequest,
    user: AppUser = Depends(require_registered_user),
) -> CreatedResponse:
    """
    Create a post against a currently active event.

    Raises:
        ValidationFailedError: If no event is referenced (400)
        UnknownEventError: If the event does not exist (400)
        InactiveEventError: If the event is not active (403)
    """
    service = PostService()
    post = await service.create(user, post_request)
    return CreatedResponse(id=post.id)


@router.post(
    "/{post_id}/attach",
    response_model=PostResponse,
    responses={
        **_ERROR_RESPONSES,
        413: {"description": "Upload exceeds the maximum request size"},
    },
)
async def attach_image(
    post_id: str,
    image: UploadFile = File(..., description="PNG, JPEG or GIF image"),
    user: AppUser = Depends(require_registered_user),
) -> PostResponse:
    """
    Attach an image to a post.

    An image can be attached once; resized variants are produced
    asynchronously.

    Raises:
        ForbiddenError: If the caller does not own the post (403)
        ImageAlreadyAttachedError: If the post has an image (403)
        ValidationFailedError: If the upload is not a supported image (400)
    """
    data = await image.read()
    service = PostService()
    post = await service.attach_image(user, post_id, data)
    return PostResponse.from_post(post)


@router.get("/{post_id}", response_model=PostView, responses=_ERROR_RESPONSES)
async def get_post(post_id: str) -> PostView:
    """
    Retrieve a post with its author's username.

    Raises:
        NotFoundError: If the post or its author does not exist (404)
    """
    service = PostService()
    return await service.get_view(post_id)


@router.put("/{post_id}", response_model=OkResponse, responses=_ERROR_RESPONSES)
async def update_post(
    post_id: str,
    post_request: PostRequest,
    user: AppUser = Depends(require_registered_user),
) -> OkResponse:
    """
    Update a post's text. The post cannot move to another event.

    Raises:
        ForbiddenError: If the caller does not own the post (403)
        ValidationFailedError: If the event reference changes (400)
        InactiveEventError: If the event is not active (403)
    """
    service = PostService()
    await service.update(user, post_id, post_request)
    return OkResponse()


@router.delete("/{post_id}", response_model=OkResponse, responses=_ERROR_RESPONSES)
async def delete_post(
    post_id: str,
    user: AppUser = Depends(require_registered_user),
) -> OkResponse:
    """Delete one of the caller's posts."""
    service = PostService()
    await service.delete(user, post_id)
    return OkResponse()
