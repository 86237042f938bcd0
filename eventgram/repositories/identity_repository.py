"""Identity credential repository for DynamoDB operations."""

from typing import Any, Optional

from eventgram.config import settings
from eventgram.models.identity import Identity
from eventgram.repositories.base import KEY_ATTRIBUTE, BaseRepository


class IdentityRepository(BaseRepository[Identity]):
    """
    Repository for Identity credentials in DynamoDB.

    Credentials are keyed by key_id, so a bearer token resolves with a
    single get rather than a scan.
    """

    kind = "identity"
    model = Identity
    id_field = "key_id"

    def __init__(
        self,
        table_name: str | None = None,
        client_config: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            table_name or settings.dynamodb_table_identities, client_config
        )

    async def get_by_key_id(self, key_id: str) -> Optional[Identity]:
        return await self.get(key_id)

    async def list_all(self) -> list[Identity]:
        return await self.query(order="created_at")

    async def revoke(self, key_id: str) -> Optional[Identity]:
        """
        Revoke a credential.

        Args:
            key_id: Credential to revoke

        Returns:
            Updated Identity, or None if not found
        """
        identity = await self.get(key_id)
        if identity is None:
            return None
        identity.status = "revoked"
        await self.put(identity)
        return identity

    async def touch(self, key_id: str, timestamp: str) -> None:
        """
        Record when a credential was last used.

        Only `last_used_at` is written, so a concurrent revoke is never
        overwritten.
        """
        async with self._resource() as dynamodb:
            table = await dynamodb.Table(self.table_name)
            await table.update_item(
                Key={KEY_ATTRIBUTE: self.entity_key(key_id)},
                UpdateExpression="SET #u = :u",
                ExpressionAttributeNames={"#u": "last_used_at"},
                ExpressionAttributeValues={":u": timestamp},
            )
