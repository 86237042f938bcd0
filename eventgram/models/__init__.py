"""Data models for the Eventgram API."""

from eventgram.models.event import Event
from eventgram.models.identity import Identity
from eventgram.models.post import Post
from eventgram.models.user import AppUser

__all__ = ["Event", "Post", "AppUser", "Identity"]
