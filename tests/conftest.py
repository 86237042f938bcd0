"""Shared fixtures: a fixed clock, sample entities and emulated AWS services."""

import json
import socket
from datetime import UTC, datetime, timedelta
from typing import Any

import aioboto3
import httpx
import pytest
from moto.server import ThreadedMotoServer

from eventgram.config import aws_client_config, settings
from eventgram.models.event import Event
from eventgram.models.identity import Identity
from eventgram.models.post import Post
from eventgram.models.user import AppUser
from eventgram.repositories.base import KEY_ATTRIBUTE, get_dynamodb_config
from infrastructure.aws_resources import create_all_resources

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time used by service tests."""
    return NOW


@pytest.fixture
def user() -> AppUser:
    return AppUser(
        id="user-1",
        email="sam@example.com",
        username="sam",
        first_name="Sam",
        last_name="Lee",
        private=False,
        created=NOW - timedelta(days=30),
        modified=NOW - timedelta(days=30),
    )


@pytest.fixture
def other_user() -> AppUser:
    return AppUser(
        id="user-2",
        email="kim@example.com",
        username="kim",
        created=NOW - timedelta(days=10),
        modified=NOW - timedelta(days=10),
    )


@pytest.fixture
def identity() -> Identity:
    """Identity belonging to the `user` fixture."""
    return Identity(
        key_id="key-1",
        key_hash="$2b$12$notarealhash",
        identity_id="user-1",
        email="sam@example.com",
        status="active",
        created_at="2026-09-01T00:00:00+00:00",
    )


@pytest.fixture
def make_event():
    """Factory for events relative to NOW; defaults to an active public event."""

    def _make(**overrides) -> Event:
        fields = {
            "id": "evt-1",
            "name": "Harbour fireworks",
            "description": "On the pier",
            "start": NOW - timedelta(hours=1),
            "end": NOW + timedelta(hours=1),
            "private": False,
            "creator": "user-1",
            "created": NOW - timedelta(days=1),
            "modified": NOW - timedelta(days=1),
        }
        fields.update(overrides)
        return Event(**fields)

    return _make


@pytest.fixture
def make_post():
    """Factory for posts owned by the `user` fixture."""

    def _make(**overrides) -> Post:
        fields = {
            "id": "post-1",
            "user_id": "user-1",
            "event_id": "evt-1",
            "image": "",
            "text": "Front row!",
            "created": NOW - timedelta(minutes=30),
            "modified": NOW - timedelta(minutes=30),
        }
        fields.update(overrides)
        return Post(**fields)

    return _make


# AWS services are emulated by one moto server for the whole run. Every
# test that uses `aws` starts from an empty server with the application's
# tables, bucket and queue created.


def _free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture(scope="session")
def moto_server():
    port = _free_port()
    server = ThreadedMotoServer(ip_address="127.0.0.1", port=port, verbose=False)
    server.start()
    yield f"http://127.0.0.1:{port}"
    server.stop()


@pytest.fixture
async def aws(moto_server, monkeypatch) -> str:
    """Point DynamoDB, S3 and SQS at a freshly reset moto server."""
    httpx.post(f"{moto_server}/moto-api/reset").raise_for_status()

    for name in ("dynamodb_endpoint_url", "s3_endpoint_url", "sqs_endpoint_url"):
        monkeypatch.setattr(settings, name, moto_server)
    monkeypatch.setattr(settings, "aws_region", "us-east-1")
    monkeypatch.setattr(settings, "aws_access_key_id", "testing")
    monkeypatch.setattr(settings, "aws_secret_access_key", "testing")
    monkeypatch.setattr(settings, "aws_session_token", None)
    monkeypatch.setattr(settings, "image_base_url", None)
    monkeypatch.setattr(settings, "image_queue_url", None)
    # Two items per scan call, so listings page through LastEvaluatedKey
    monkeypatch.setattr(settings, "dynamodb_scan_page_size", 2)

    queue_url = await create_all_resources()
    monkeypatch.setattr(settings, "image_queue_url", queue_url)
    return moto_server


@pytest.fixture
def client_config(aws) -> dict[str, Any]:
    return get_dynamodb_config()


@pytest.fixture
def stored_item(aws):
    """Read a raw item from a table, bypassing the repositories."""

    async def _item(table_name: str, key: str) -> dict[str, Any] | None:
        session = aioboto3.Session()
        async with session.resource("dynamodb", **get_dynamodb_config()) as dynamodb:
            table = await dynamodb.Table(table_name)
            response = await table.get_item(Key={KEY_ATTRIBUTE: key})
        return response.get("Item")

    return _item


@pytest.fixture
def bucket_keys(aws):
    """List the object keys in the image bucket."""

    async def _keys() -> list[str]:
        session = aioboto3.Session()
        async with session.client(
            "s3", **aws_client_config(settings.s3_endpoint_url)
        ) as s3:
            response = await s3.list_objects_v2(Bucket=settings.image_bucket)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _keys


@pytest.fixture
def queued_messages(aws):
    """Receive the message bodies waiting on the image queue."""

    async def _messages() -> list[dict[str, Any]]:
        session = aioboto3.Session()
        async with session.client(
            "sqs", **aws_client_config(settings.sqs_endpoint_url)
        ) as sqs:
            response = await sqs.receive_message(
                QueueUrl=settings.image_queue_url, MaxNumberOfMessages=10
            )
        return [json.loads(m["Body"]) for m in response.get("Messages", [])]

    return _messages
