"""Tests for image variant resizing."""

from io import BytesIO

import pytest
from PIL import Image

from eventgram.exceptions import UnsupportedImageError
from eventgram.imaging.resize import DISPLAY, THUMBNAIL, ResizeSpec, resize_image


def encode(size: tuple[int, int], image_format: str, mode: str = "RGB") -> bytes:
    output = BytesIO()
    Image.new(mode, size, color=0).save(output, format=image_format)
    return output.getvalue()


def decode(data: bytes) -> Image.Image:
    image = Image.open(BytesIO(data))
    image.load()
    return image


def test_variant_names() -> None:
    assert THUMBNAIL.derived_name("user-1/post-1") == "user-1/post-1_thumb"
    assert DISPLAY.derived_name("user-1/post-1") == "user-1/post-1_display"


@pytest.mark.parametrize(
    "content_type,image_format",
    [("image/png", "PNG"), ("image/jpeg", "JPEG"), ("image/gif", "GIF")],
)
def test_keeps_format_and_aspect_ratio(content_type, image_format) -> None:
    data = encode((400, 200), image_format)

    resized = decode(resize_image(data, content_type, ResizeSpec(100, "_t")))

    assert resized.format == image_format
    assert resized.size == (100, 50)


def test_portrait_bounded_by_height() -> None:
    data = encode((300, 900), "PNG")
    resized = decode(resize_image(data, "image/png", ResizeSpec(90, "_t")))
    assert resized.size == (30, 90)


def test_small_images_are_not_enlarged() -> None:
    data = encode((50, 40), "PNG")
    resized = decode(resize_image(data, "image/png", ResizeSpec(640, "_d")))
    assert resized.size == (50, 40)


def test_transparent_image_saved_as_jpeg() -> None:
    data = encode((200, 200), "PNG", mode="RGBA")
    resized = decode(resize_image(data, "image/jpeg", ResizeSpec(100, "_t")))
    assert resized.format == "JPEG"
    assert resized.mode == "RGB"


def test_unknown_content_type() -> None:
    with pytest.raises(UnsupportedImageError):
        resize_image(encode((10, 10), "PNG"), "image/webp", THUMBNAIL)


def test_undecodable_data() -> None:
    with pytest.raises(UnsupportedImageError):
        resize_image(b"not an image", "image/png", THUMBNAIL)
