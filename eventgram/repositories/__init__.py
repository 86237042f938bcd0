"""Repository layer for DynamoDB operations."""

from eventgram.repositories.event_repository import EventRepository
from eventgram.repositories.identity_repository import IdentityRepository
from eventgram.repositories.post_repository import PostRepository
from eventgram.repositories.user_repository import UserRepository

__all__ = ["EventRepository", "PostRepository", "UserRepository", "IdentityRepository"]
