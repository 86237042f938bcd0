"""Script to create the DynamoDB tables, S3 bucket and SQS queue for LocalStack or AWS."""

import asyncio
from typing import Any

import aioboto3
from botocore.exceptions import ClientError

from eventgram.config import aws_client_config, settings
from eventgram.repositories.base import KEY_ATTRIBUTE


async def create_entity_table(dynamodb: Any, table_name: str) -> None:
    """
    Create a table keyed by the single "<kind>:<id>" partition key.

    Args:
        dynamodb: DynamoDB resource
        table_name: Name of the table
    """
    try:
        table = await dynamodb.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": KEY_ATTRIBUTE, "KeyType": "HASH"},
            ],
            AttributeDefinitions=[
                {"AttributeName": KEY_ATTRIBUTE, "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        await table.wait_until_exists()
        print(f"✓ Created table: {table_name}")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"→ Table already exists: {table_name}")
        else:
            raise


async def create_image_bucket(s3: Any, bucket: str) -> None:
    params: dict[str, Any] = {"Bucket": bucket}
    if settings.aws_region != "us-east-1":
        params["CreateBucketConfiguration"] = {
            "LocationConstraint": settings.aws_region
        }
    try:
        await s3.create_bucket(**params)
        print(f"✓ Created bucket: {bucket}")
    except ClientError as e:
        if e.response["Error"]["Code"] in (
            "BucketAlreadyOwnedByYou",
            "BucketAlreadyExists",
        ):
            print(f"→ Bucket already exists: {bucket}")
        else:
            raise


async def create_image_queue(sqs: Any, queue_name: str) -> str:
    """Create the image processing queue; returns its URL."""
    response = await sqs.create_queue(QueueName=queue_name)
    print(f"✓ Image queue ready: {response['QueueUrl']}")
    return response["QueueUrl"]


async def create_all_resources() -> str:
    """
    Create the entity tables, image bucket and image queue from settings.

    Returns:
        URL of the image processing queue
    """
    session = aioboto3.Session()
    async with session.resource(
        "dynamodb", **aws_client_config(settings.dynamodb_endpoint_url)
    ) as dynamodb:
        for table_name in (
            settings.dynamodb_table_events,
            settings.dynamodb_table_posts,
            settings.dynamodb_table_users,
            settings.dynamodb_table_identities,
        ):
            await create_entity_table(dynamodb, table_name)

    async with session.client("s3", **aws_client_config(settings.s3_endpoint_url)) as s3:
        await create_image_bucket(s3, settings.image_bucket)

    async with session.client(
        "sqs", **aws_client_config(settings.sqs_endpoint_url)
    ) as sqs:
        queue_name = (settings.image_queue_url or "").rstrip("/").rsplit("/", 1)[-1]
        queue_url = await create_image_queue(sqs, queue_name or "eventgram-images")

    return queue_url


async def main() -> None:
    """Create all required AWS resources."""
    print("Creating AWS resources...")
    print(f"Region: {settings.aws_region}")
    print(f"DynamoDB endpoint: {settings.dynamodb_endpoint_url or 'AWS'}")
    print()

    queue_url = await create_all_resources()

    print()
    print(f"Set IMAGE_QUEUE_URL={queue_url}")
    print("✓ All resources created successfully!")


if __name__ == "__main__":
    asyncio.run(main())
