"""Base repository class with common DynamoDB operations."""

from typing import Any, ClassVar, Generic, TypeVar

import aioboto3
from botocore.exceptions import ClientError
from pydantic import BaseModel

from eventgram.config import aws_client_config, settings
from eventgram.exceptions import IdentifierCollisionError
from eventgram.logging.config import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

KEY_ATTRIBUTE = "key"


def get_dynamodb_config() -> dict[str, Any]:
    """
    Build DynamoDB resource configuration based on environment.

    Returns:
        Dictionary of aioboto3 resource parameters
    """
    return aws_client_config(settings.dynamodb_endpoint_url)


def entity_key(kind: str, entity_id: str) -> str:
    """
    Build the store key for an entity.

    Args:
        kind: Entity kind (event, post, user)
        entity_id: Entity identifier

    Returns:
        Key of the form "<kind>:<id>"

    Raises:
        ValueError: If no identifier is provided
    """
    if not entity_id:
        raise ValueError(f"No {kind} ID provided.")
    return f"{kind}:{entity_id}"


class BaseRepository(Generic[ModelT]):
    """
    Keyed entity store for one entity kind.

    Every item carries a single partition key attribute, `key`, holding
    "<kind>:<id>". All methods are async and use aioboto3 for non-blocking
    database operations.
    """

    kind: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    id_field: ClassVar[str] = "id"

    def __init__(
        self, table_name: str, client_config: dict[str, Any] | None = None
    ) -> None:
        """
        Initialize repository with table name.

        Args:
            table_name: Name of the DynamoDB table
            client_config: aioboto3 resource parameters (defaults from settings)
        """
        self.table_name = table_name
        self.client_config = client_config or get_dynamodb_config()
        self.scan_page_size = settings.dynamodb_scan_page_size
        self.session = aioboto3.Session()

    def _resource(self):
        return self.session.resource("dynamodb", **self.client_config)

    def entity_key(self, entity_id: str) -> str:
        return entity_key(self.kind, entity_id)

    def _to_item(self, entity: ModelT) -> dict[str, Any]:
        # Exclude None values as DynamoDB doesn't handle them
        item = entity.model_dump(mode="json", exclude_none=True)
        item[KEY_ATTRIBUTE] = self.entity_key(getattr(entity, self.id_field))
        return item

    def _from_item(self, item: dict[str, Any]) -> ModelT:
        return self.model.model_validate(item)

    async def get(self, entity_id: str) -> ModelT | None:
        """
        Get an entity by identifier.

        Args:
            entity_id: Entity identifier

        Returns:
            The entity, or None if it does not exist
        """
        if not entity_id:
            return None

        async with self._resource() as dynamodb:
            table = await dynamodb.Table(self.table_name)
            response = await table.get_item(
                Key={KEY_ATTRIBUTE: self.entity_key(entity_id)}
            )

        item = response.get("Item")
        if item is None:
            return None
        return self._from_item(item)

    async def exists(self, entity_id: str) -> bool:
        return await self.get(entity_id) is not None

    async def put(self, entity: ModelT) -> str:
        """
        Store an entity, replacing any existing item with the same key.

        Args:
            entity: Entity to store

        Returns:
            The entity's store key
        """
        item = self._to_item(entity)
        async with self._resource() as dynamodb:
            table = await dynamodb.Table(self.table_name)
            await table.put_item(Item=item)
        return item[KEY_ATTRIBUTE]

    async def create(self, entity: ModelT) -> str:
        """
        Store a new entity only if no item with its key exists.

        Args:
            entity: Entity to store

        Returns:
            The entity's store key

        Raises:
            IdentifierCollisionError: If the key is already taken
        """
        item = self._to_item(entity)
        async with self._resource() as dynamodb:
            table = await dynamodb.Table(self.table_name)
            try:
                await table.put_item(
                    Item=item,
                    ConditionExpression="attribute_not_exists(#k)",
                    ExpressionAttributeNames={"#k": KEY_ATTRIBUTE},
                )
            except ClientError as e:
                if e.response["Error"]["Code"] != "ConditionalCheckFailedException":
                    raise
                logger.warning(
                    "Identifier collision on conditional create",
                    extra={"context": {"kind": self.kind, "key": item[KEY_ATTRIBUTE]}},
                )
                raise IdentifierCollisionError(kind=self.kind) from e
        return item[KEY_ATTRIBUTE]

    async def delete(self, entity_id: str) -> bool:
        """
        Delete an entity.

        Args:
            entity_id: Entity identifier

        Returns:
            True if an item was deleted, False if it did not exist
        """
        async with self._resource() as dynamodb:
            table = await dynamodb.Table(self.table_name)
            response = await table.delete_item(
                Key={KEY_ATTRIBUTE: self.entity_key(entity_id)},
                ReturnValues="ALL_OLD",
            )
        return bool(response.get("Attributes"))

    async def query(
        self,
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ModelT]:
        """
        Find entities whose attributes equal every value in `filters`.

        Args:
            filters: Attribute name to required value
            order: Model attribute to sort by, "-" prefix for descending
            limit: Maximum number of entities to return
            offset: Number of sorted entities to skip

        Returns:
            Matching entities
        """
        scan_params: dict[str, Any] = {}
        if self.scan_page_size:
            scan_params["Limit"] = self.scan_page_size
        if filters:
            names: dict[str, str] = {}
            values: dict[str, Any] = {}
            clauses = []
            for i, (name, value) in enumerate(filters.items()):
                names[f"#f{i}"] = name
                values[f":v{i}"] = value
                clauses.append(f"#f{i} = :v{i}")
            scan_params["FilterExpression"] = " AND ".join(clauses)
            scan_params["ExpressionAttributeNames"] = names
            scan_params["ExpressionAttributeValues"] = values

        items: list[dict[str, Any]] = []
        async with self._resource() as dynamodb:
            table = await dynamodb.Table(self.table_name)
            while True:
                response = await table.scan(**scan_params)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_params["ExclusiveStartKey"] = last_key

        entities = [self._from_item(item) for item in items]

        if order:
            field = order.lstrip("-")
            entities.sort(
                key=lambda entity: getattr(entity, field),
                reverse=order.startswith("-"),
            )

        entities = entities[max(offset, 0):]
        if limit is not None:
            entities = entities[:limit]
        return entities
