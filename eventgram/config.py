"""Configuration management using Pydantic Settings."""

import os
from datetime import timedelta
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Only load .env file in development (not Lambda/production)
        env_file=".env" if os.getenv("AWS_EXECUTION_ENV") is None else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AWS Configuration
    aws_region: str = "us-east-2"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None  # Required for temporary credentials

    @field_validator(
        "aws_access_key_id",
        "aws_secret_access_key",
        "aws_session_token",
        mode="before",
    )
    @classmethod
    def convert_empty_string_to_none(cls, v):
        """Convert empty strings to None so boto3 can use IAM role in Lambda."""
        if v is None:
            return None
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    # DynamoDB Configuration
    dynamodb_endpoint_url: str | None = None
    dynamodb_table_events: str = "eventgram-events"
    dynamodb_table_posts: str = "eventgram-posts"
    dynamodb_table_users: str = "eventgram-users"
    dynamodb_table_identities: str = "eventgram-identities"
    dynamodb_scan_page_size: int | None = None  # Items per scan call, None for 1MB pages

    # Image storage (S3) and processing queue (SQS)
    s3_endpoint_url: str | None = None
    image_bucket: str = "eventgram-images"
    image_base_url: str | None = None
    sqs_endpoint_url: str | None = None
    image_queue_url: str | None = None

    # Application Configuration
    log_level: str = "INFO"
    api_title: str = "Eventgram API"
    api_version: str = "1.0.0"
    api_gateway_base_path: str = "/v1"

    # Event rules
    max_event_length_hours: int = 168  # 1 week
    max_start_future_hours: int = 672  # 4 weeks
    allow_extending_expired_events: bool = True

    # Listings
    feed_page_size: int = 20
    default_feed_order: str = "-Created"
    related_posts_limit: int = 20

    # API Limits
    max_request_size_bytes: int = 10 * 1024 * 1024  # 10MB, image uploads

    # Image variants
    thumbnail_max_dimension: int = 100
    display_max_dimension: int = 640

    @property
    def max_event_length(self) -> timedelta:
        """Longest allowed span between event start and end."""
        return timedelta(hours=self.max_event_length_hours)

    @property
    def max_start_future(self) -> timedelta:
        """How far in the future an event may be scheduled to start."""
        return timedelta(hours=self.max_start_future_hours)


def aws_client_config(endpoint_url: str | None = None) -> dict[str, Any]:
    """
    Build aioboto3 client/resource keyword arguments.

    In Lambda with an IAM role only the region is passed and the default
    credential chain is used. For LocalStack an endpoint_url and explicit
    credentials are included.

    Args:
        endpoint_url: Service endpoint override (LocalStack)

    Returns:
        Dictionary of client parameters
    """
    config: dict[str, Any] = {"region_name": settings.aws_region}

    if endpoint_url:
        config["endpoint_url"] = endpoint_url

    # In Lambda, AWS provides all three for temporary credentials
    if settings.aws_access_key_id:
        config["aws_access_key_id"] = settings.aws_access_key_id
    if settings.aws_secret_access_key:
        config["aws_secret_access_key"] = settings.aws_secret_access_key
    if settings.aws_session_token:
        config["aws_session_token"] = settings.aws_session_token

    return config


# Global settings instance
settings = Settings()
