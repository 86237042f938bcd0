"""
Image processing worker.

Consumes SQS messages of the form {"filename": "<user_id>/<post_id>"} and
writes a resized copy of the image for each configured variant. Processing
is best-effort: failures are logged and the message is not retried.
"""

import asyncio
import json
from collections.abc import Sequence
from typing import Any

from eventgram.exceptions import ImageStoreError, UnsupportedImageError
from eventgram.imaging.resize import DEFAULT_VARIANTS, ResizeSpec, resize_image
from eventgram.logging.config import configure_logging, get_logger
from eventgram.storage.image_store import ImageStore

logger = get_logger(__name__)


class ImageProcessor:
    """Produces resized variants of stored images."""

    def __init__(
        self,
        store: ImageStore | None = None,
        variants: Sequence[ResizeSpec] = DEFAULT_VARIANTS,
    ) -> None:
        self.store = store or ImageStore.from_settings()
        self.variants = variants

    async def process(self, filename: str) -> list[str]:
        """
        Create every variant of one image.

        Args:
            filename: Object key of the original image

        Returns:
            Object keys of the written variants
        """
        data, content_type = await self.store.read(filename)
        logger.info(
            "Processing image",
            extra={"context": {"filename": filename, "content_type": content_type}},
        )

        written = []
        for variant in self.variants:
            new_name = variant.derived_name(filename)
            resized = resize_image(data, content_type, variant)
            await self.store.write(new_name, resized, content_type)
            written.append(new_name)

        logger.info(
            "Processed image",
            extra={"context": {"filename": filename, "variants": written}},
        )
        return written


def _filename_from_record(record: dict[str, Any]) -> str | None:
    try:
        body = json.loads(record.get("body") or "{}")
    except json.JSONDecodeError:
        return None
    filename = body.get("filename") if isinstance(body, dict) else None
    return filename or None


async def process_records(
    records: list[dict[str, Any]], processor: ImageProcessor
) -> dict[str, int]:
    """
    Process a batch of SQS records.

    Returns:
        Counts of processed and failed records
    """
    processed = failed = 0
    for record in records:
        filename = _filename_from_record(record)
        if not filename:
            logger.error(
                "Message is missing 'filename'",
                extra={"context": {"message_id": record.get("messageId")}},
            )
            failed += 1
            continue

        try:
            await processor.process(filename)
        except (ImageStoreError, UnsupportedImageError) as exc:
            logger.error(
                "Failed to process image",
                exc_info=exc,
                extra={"context": {"filename": filename}},
            )
            failed += 1
        else:
            processed += 1

    return {"processed": processed, "failed": failed}


def lambda_handler(event: dict, context: object) -> dict:
    """
    AWS Lambda handler for the image processing queue.

    Args:
        event: SQS event with a list of Records
        context: Lambda context object

    Returns:
        Counts of processed and failed records
    """
    configure_logging()
    processor = ImageProcessor()
    return asyncio.run(process_records(event.get("Records", []), processor))
