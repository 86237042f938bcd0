"""Tests for post, user and identity models."""

from datetime import datetime

from eventgram.models.identity import Identity
from eventgram.models.user import normalize_username


def test_post_image_filename(make_post) -> None:
    post = make_post(id="abc", user_id="user-9")
    assert post.image_filename == "user-9/abc"


def test_post_is_valid(make_post) -> None:
    assert make_post().is_valid() is True
    assert make_post(event_id="").is_valid() is False
    assert make_post(user_id="").is_valid() is False


def test_post_ignores_unknown_fields(make_post) -> None:
    post = make_post(key="post:post-1")
    assert not hasattr(post, "key")


def test_naive_timestamps_become_utc(make_post) -> None:
    post = make_post(created=datetime(2026, 1, 1, 10, 0))
    assert post.created.utcoffset().total_seconds() == 0


def test_user_is_valid(user) -> None:
    assert user.is_valid() is True
    user.username = ""
    assert user.is_valid() is False


def test_normalize_username() -> None:
    assert normalize_username("  HarbourFan ") == "harbourfan"


def test_identity_is_active(identity: Identity) -> None:
    assert identity.is_active is True
    identity.status = "revoked"
    assert identity.is_active is False
