"""Image resizing for processed post image variants."""

from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from eventgram.config import settings
from eventgram.exceptions import UnsupportedImageError

# MIME type to Pillow format name
ENCODE_FORMATS = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
}


@dataclass(frozen=True)
class ResizeSpec:
    """
    A processed variant of an uploaded image.

    Attributes:
        max_dimension: Longest side of the variant in pixels
        suffix: Appended to the original object key
    """

    max_dimension: int
    suffix: str

    def derived_name(self, filename: str) -> str:
        return filename + self.suffix


THUMBNAIL = ResizeSpec(max_dimension=settings.thumbnail_max_dimension, suffix="_thumb")
DISPLAY = ResizeSpec(max_dimension=settings.display_max_dimension, suffix="_display")

DEFAULT_VARIANTS = (THUMBNAIL, DISPLAY)


def resize_image(data: bytes, content_type: str, variant: ResizeSpec) -> bytes:
    """
    Shrink an image to fit within the variant's bounding box.

    Aspect ratio is preserved and images already small enough are not
    enlarged. The output keeps the input format.

    Args:
        data: Encoded image
        content_type: MIME type of the image
        variant: Variant to produce

    Returns:
        Encoded resized image

    Raises:
        UnsupportedImageError: If the type is unknown or the data cannot be decoded
    """
    image_format = ENCODE_FORMATS.get(content_type)
    if image_format is None:
        raise UnsupportedImageError(f"Cannot resize unknown image type: {content_type}")

    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            resized = img.copy()
    except (UnidentifiedImageError, OSError) as exc:
        raise UnsupportedImageError(f"Failed to decode image: {exc}") from exc

    resized.thumbnail(
        (variant.max_dimension, variant.max_dimension), Image.Resampling.BICUBIC
    )
    if image_format == "JPEG" and resized.mode not in ("RGB", "L"):
        resized = resized.convert("RGB")

    output = BytesIO()
    resized.save(output, format=image_format)
    return output.getvalue()
