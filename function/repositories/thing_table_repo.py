# ============================================================================
# THING TABLE REPOSITORY
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Table storage access
# PURPOSE: CRUD for things over Azure Table Storage
# CREATED: 14 OCT 2026
# ============================================================================
"""
Thing Table Repository

Sync repository over an azure-data-tables TableClient.

Design Principles:
- One entity per thing, PartitionKey = RowKey = id
- Returns Thing models, never raw entities
- Absent things come back as None (the blueprint maps to 404)
- Etag mismatches raise azure.core.exceptions.ResourceModifiedError
- Everything else propagates (the blueprint maps to 500)
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from azure.core import MatchConditions
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.data.tables import TableClient, UpdateMode

from core.logging import ComponentType, get_logger
from core.models.thing import Thing, new_thing_id
from function.config import FunctionConfig, get_config

logger = get_logger(__name__, ComponentType.REPOSITORY)


def build_table_client(config: FunctionConfig) -> TableClient:
    """
    Create a TableClient for the configured table.

    Connection string auth wins; otherwise an azure-identity credential is
    used against the account endpoint.
    """
    if config.has_connection_string:
        logger.debug(f"TableClient from connection string for table '{config.table_name}'")
        return TableClient.from_connection_string(
            config.connection_string, table_name=config.table_name
        )

    if not config.has_identity_config:
        raise ValueError(
            "Table storage not configured. Set THINGS_STORAGE_CONNECTION_STRING, "
            "or USE_MANAGED_IDENTITY=true with THINGS_STORAGE_ACCOUNT."
        )

    if config.managed_identity_client_id:
        from azure.identity import ManagedIdentityCredential
        credential = ManagedIdentityCredential(client_id=config.managed_identity_client_id)
        logger.debug("ManagedIdentityCredential initialized with client_id")
    else:
        from azure.identity import DefaultAzureCredential
        credential = DefaultAzureCredential()
        logger.debug("DefaultAzureCredential initialized")

    endpoint = config.get_table_endpoint()
    logger.debug(f"TableClient for {endpoint}/{config.table_name}")
    return TableClient(endpoint=endpoint, table_name=config.table_name, credential=credential)


def _match_condition(etag: Optional[str]) -> Dict[str, Any]:
    """Keyword arguments for an optional If-Match precondition."""
    if not etag or etag == "*":
        return {"match_condition": MatchConditions.Unconditionally}
    return {"etag": etag, "match_condition": MatchConditions.IfNotModified}


class ThingTableRepository:
    """
    Repository for things stored in a single table.

    Pattern:
    - Client per repository (function invocations are short-lived)
    - Inject a TableClient in tests
    """

    def __init__(
        self,
        client: Optional[TableClient] = None,
        config: Optional[FunctionConfig] = None,
    ):
        self._config = config or get_config()
        self._client = client or build_table_client(self._config)

    @property
    def table_name(self) -> str:
        return self._client.table_name

    # ================================================================
    # TABLE
    # ================================================================

    def ensure_table(self) -> bool:
        """
        Create the table if it does not exist.

        Returns:
            True if the table was created, False if it already existed.
        """
        try:
            self._client.create_table()
        except ResourceExistsError:
            logger.debug(f"Table '{self.table_name}' already exists")
            return False
        logger.info(f"Created table '{self.table_name}'")
        return True

    def ping(self) -> None:
        """Read at most one entity; raises if the table is unreachable."""
        for _ in self._client.list_entities(results_per_page=1, select=["RowKey"]):
            break

    # ================================================================
    # THINGS
    # ================================================================

    def list_things(self, top: Optional[int] = None) -> List[Thing]:
        """List things in service order, optionally capped at top items."""
        things: List[Thing] = []
        kwargs = {"results_per_page": top} if top else {}
        for entity in self._client.list_entities(**kwargs):
            things.append(Thing.from_entity(entity))
            if top and len(things) >= top:
                break
        return things

    def get_thing(self, thing_id: str) -> Optional[Thing]:
        """Get a thing by id, or None if absent."""
        try:
            entity = self._client.get_entity(partition_key=thing_id, row_key=thing_id)
        except ResourceNotFoundError:
            return None
        return Thing.from_entity(entity)

    def create_thing(self, name: str, description: str = "") -> Thing:
        """Insert a new thing with a fresh id and return it with its new etag."""
        thing_id = new_thing_id()
        entity = Thing.to_entity(thing_id, {"name": name, "description": description})
        metadata = self._client.create_entity(entity=entity)
        logger.info(f"Created thing {thing_id}")

        # The insert response carries the new etag; no read-back
        created = metadata.get("date")
        return Thing(
            id=thing_id,
            name=name,
            description=description,
            etag=metadata.get("etag"),
            timestamp=created if isinstance(created, datetime) else None,
        )

    def update_thing(
        self,
        thing_id: str,
        changes: Mapping[str, Any],
        etag: Optional[str] = None,
    ) -> Optional[Thing]:
        """
        Merge changes into an existing thing.

        Args:
            thing_id: Thing to update
            changes: Fields to overwrite (absent fields are left untouched)
            etag: Optional If-Match etag

        Returns:
            The updated thing, or None if it does not exist.

        Raises:
            ResourceModifiedError: etag did not match the stored entity
        """
        entity = Thing.to_entity(thing_id, changes)
        try:
            self._client.update_entity(
                entity=entity, mode=UpdateMode.MERGE, **_match_condition(etag)
            )
        except ResourceNotFoundError:
            return None
        logger.info(f"Updated thing {thing_id}: {sorted(k for k in entity if k not in Thing.KEY_PROPERTIES)}")
        return self.get_thing(thing_id)

    def delete_thing(self, thing_id: str, etag: Optional[str] = None) -> None:
        """
        Delete a thing. Deleting an absent thing is not an error.

        Raises:
            ResourceModifiedError: etag did not match the stored entity
        """
        try:
            self._client.delete_entity(
                partition_key=thing_id, row_key=thing_id, **_match_condition(etag)
            )
        except ResourceNotFoundError:
            logger.debug(f"Delete of absent thing {thing_id}")
            return
        logger.info(f"Deleted thing {thing_id}")

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ThingTableRepository":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


__all__ = ["ThingTableRepository", "build_table_client"]
