"""
S3 blob store for post images.

The bucket and endpoint are constructor arguments; `from_settings` builds
the store the API uses.
"""

from io import BytesIO
from typing import Any

import aioboto3
from botocore.exceptions import ClientError
from PIL import Image, UnidentifiedImageError

from eventgram.config import aws_client_config, settings
from eventgram.exceptions import ImageStoreError, UnsupportedImageError
from eventgram.logging.config import get_logger

logger = get_logger(__name__)

# Pillow format name to MIME type for the formats posts accept
SUPPORTED_IMAGE_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
}
SUPPORTED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}


def sniff_content_type(data: bytes) -> str | None:
    """
    Detect the content type of uploaded image bytes.

    Args:
        data: Raw file contents

    Returns:
        MIME type for JPEG, PNG or GIF data, None for anything else
    """
    if not data:
        return None
    try:
        with Image.open(BytesIO(data)) as img:
            return SUPPORTED_IMAGE_FORMATS.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        return None


class ImageStore:
    """
    S3 object storage for image files.

    Object keys are "<user_id>/<post_id>" for originals and carry a
    suffix for processed variants.
    """

    def __init__(
        self,
        bucket: str,
        client_config: dict[str, Any] | None = None,
        base_url: str | None = None,
    ) -> None:
        """
        Initialize image store.

        Args:
            bucket: S3 bucket name
            client_config: aioboto3 client parameters
            base_url: Public URL prefix for object links
        """
        self.bucket = bucket
        self.client_config = client_config or {}
        self.base_url = base_url
        self.session = aioboto3.Session()

    @classmethod
    def from_settings(cls) -> "ImageStore":
        return cls(
            bucket=settings.image_bucket,
            client_config=aws_client_config(settings.s3_endpoint_url),
            base_url=settings.image_base_url,
        )

    def _client(self):
        return self.session.client("s3", **self.client_config)

    def object_link(self, filename: str) -> str:
        """Public link to a stored object."""
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{filename}"
        region = self.client_config.get("region_name", settings.aws_region)
        return f"https://{self.bucket}.s3.{region}.amazonaws.com/{filename}"

    async def write(self, filename: str, data: bytes, content_type: str) -> None:
        """
        Write an object.

        Raises:
            ImageStoreError: If the upload fails
        """
        try:
            async with self._client() as s3:
                await s3.put_object(
                    Bucket=self.bucket,
                    Key=filename,
                    Body=data,
                    ContentType=content_type,
                )
        except ClientError as e:
            raise ImageStoreError(f"Failed to write {filename}: {e}") from e

        logger.info(
            "Stored file",
            extra={"context": {"filename": filename, "size": len(data)}},
        )

    async def store(self, filename: str, data: bytes) -> str:
        """
        Validate and store an uploaded image.

        Args:
            filename: Object key
            data: Uploaded file contents

        Returns:
            The sniffed content type

        Raises:
            UnsupportedImageError: If the data is not a supported image
            ImageStoreError: If the upload fails
        """
        content_type = sniff_content_type(data)
        if content_type not in SUPPORTED_CONTENT_TYPES:
            logger.warning(
                "Invalid image content type, aborting upload",
                extra={"context": {"filename": filename}},
            )
            raise UnsupportedImageError("Invalid file type.")

        await self.write(filename, data, content_type)
        return content_type

    async def read(self, filename: str) -> tuple[bytes, str]:
        """
        Read an object and its content type.

        Raises:
            ImageStoreError: If the object cannot be read
        """
        try:
            async with self._client() as s3:
                response = await s3.get_object(Bucket=self.bucket, Key=filename)
                async with response["Body"] as stream:
                    data = await stream.read()
        except ClientError as e:
            raise ImageStoreError(f"Failed to read {filename}: {e}") from e

        return data, response.get("ContentType", "")

    async def delete(self, filename: str) -> None:
        """
        Delete an object. A missing object is not an error.

        Raises:
            ImageStoreError: If the delete fails
        """
        # S3 reports success for keys that do not exist
        try:
            async with self._client() as s3:
                await s3.delete_object(Bucket=self.bucket, Key=filename)
        except ClientError as e:
            raise ImageStoreError(f"Failed to delete {filename}: {e}") from e

        logger.info("Deleted file", extra={"context": {"filename": filename}})
