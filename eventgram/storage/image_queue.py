"""SQS queue for asynchronous image processing tasks."""

import json
from typing import Any

import aioboto3
from botocore.exceptions import ClientError

from eventgram.config import aws_client_config, settings
from eventgram.exceptions import ImageQueueError


class ImageQueue:
    """Enqueues image processing tasks consumed by the imaging Lambda."""

    def __init__(
        self, queue_url: str | None, client_config: dict[str, Any] | None = None
    ) -> None:
        self.queue_url = queue_url
        self.client_config = client_config or {}
        self.session = aioboto3.Session()

    @classmethod
    def from_settings(cls) -> "ImageQueue":
        return cls(
            queue_url=settings.image_queue_url,
            client_config=aws_client_config(settings.sqs_endpoint_url),
        )

    async def enqueue(self, filename: str) -> str:
        """
        Queue an uploaded image for processing.

        Args:
            filename: Object key of the original image

        Returns:
            SQS message ID

        Raises:
            ImageQueueError: If no queue is configured or the send fails
        """
        if not self.queue_url:
            raise ImageQueueError("No image processing queue configured.")

        try:
            async with self.session.client("sqs", **self.client_config) as sqs:
                response = await sqs.send_message(
                    QueueUrl=self.queue_url,
                    MessageBody=json.dumps({"filename": filename}),
                )
        except ClientError as e:
            raise ImageQueueError(f"Failed to queue {filename}: {e}") from e

        return response["MessageId"]
