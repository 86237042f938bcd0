"""Best-effort removal of blobs left behind by deleted posts."""

from eventgram.exceptions import ImageStoreError
from eventgram.imaging.resize import DEFAULT_VARIANTS
from eventgram.logging.config import get_logger
from eventgram.models.post import Post
from eventgram.storage.image_store import ImageStore

logger = get_logger(__name__)


async def delete_post_images(store: ImageStore, post: Post) -> bool:
    """
    Delete a post's original image and its processed variants.

    Failures are logged and never raised; a stray blob does not fail the
    request that deleted the post.

    Returns:
        True if every delete succeeded
    """
    if not post.image:
        return True

    filename = post.image_filename
    names = [filename] + [variant.derived_name(filename) for variant in DEFAULT_VARIANTS]

    ok = True
    for name in names:
        try:
            await store.delete(name)
        except ImageStoreError as exc:
            # TODO: hand failed deletes to the image queue for a later retry
            logger.error(
                "Failed to delete image file",
                exc_info=exc,
                extra={"context": {"filename": name, "user_id": post.user_id}},
            )
            ok = False
    return ok
