"""Tests for the image processing worker."""

import json
from io import BytesIO
from unittest.mock import AsyncMock, patch

import pytest
from PIL import Image

from eventgram.exceptions import ImageStoreError
from eventgram.imaging.handler import ImageProcessor, lambda_handler, process_records
from eventgram.storage.image_store import ImageStore


def png(size: tuple[int, int]) -> bytes:
    output = BytesIO()
    Image.new("RGB", size).save(output, format="PNG")
    return output.getvalue()


def record(body, message_id: str = "m-1") -> dict:
    return {"messageId": message_id, "body": json.dumps(body)}


@pytest.fixture
def mock_store() -> AsyncMock:
    store = AsyncMock()
    store.read = AsyncMock(return_value=(png((1280, 960)), "image/png"))
    return store


@pytest.mark.asyncio
async def test_process_writes_each_variant(mock_store) -> None:
    processor = ImageProcessor(store=mock_store)

    written = await processor.process("user-1/post-1")

    assert written == ["user-1/post-1_thumb", "user-1/post-1_display"]
    sizes = {}
    for call in mock_store.write.await_args_list:
        name, data, content_type = call.args
        assert content_type == "image/png"
        sizes[name] = Image.open(BytesIO(data)).size
    assert sizes == {
        "user-1/post-1_thumb": (100, 75),
        "user-1/post-1_display": (640, 480),
    }


@pytest.mark.asyncio
async def test_process_records_counts_outcomes(mock_store) -> None:
    mock_store.read.side_effect = [
        (png((200, 200)), "image/png"),
        ImageStoreError("missing object"),
    ]
    processor = ImageProcessor(store=mock_store)

    result = await process_records(
        [
            record({"filename": "user-1/a"}),
            record({"filename": "user-1/b"}),
            record({"other": "x"}),
            {"messageId": "m-4", "body": "not json"},
        ],
        processor,
    )

    assert result == {"processed": 1, "failed": 3}


@pytest.mark.asyncio
async def test_undecodable_image_is_counted_as_failure(mock_store) -> None:
    mock_store.read.return_value = (b"garbage", "image/png")

    result = await process_records(
        [record({"filename": "user-1/a"})], ImageProcessor(store=mock_store)
    )

    assert result == {"processed": 0, "failed": 1}
    mock_store.write.assert_not_awaited()


def test_lambda_handler_processes_sqs_event(mock_store) -> None:
    event = {"Records": [record({"filename": "user-1/a"})]}

    with (
        patch("eventgram.imaging.handler.ImageProcessor") as processor_class,
        patch("eventgram.imaging.handler.configure_logging"),
    ):
        processor_class.return_value = ImageProcessor(store=mock_store)
        result = lambda_handler(event, None)

    assert result == {"processed": 1, "failed": 0}


@pytest.mark.asyncio
async def test_variants_land_next_to_original(aws, bucket_keys) -> None:
    store = ImageStore.from_settings()
    await store.write("user-1/post-1", png((1280, 960)), "image/png")

    await ImageProcessor(store=store).process("user-1/post-1")

    assert await bucket_keys() == [
        "user-1/post-1",
        "user-1/post-1_display",
        "user-1/post-1_thumb",
    ]
    data, content_type = await store.read("user-1/post-1_thumb")
    assert content_type == "image/png"
    assert Image.open(BytesIO(data)).size == (100, 75)
