# ============================================================================
# FUNCTION APP CONFIGURATION
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Configuration management
# PURPOSE: Environment-based configuration for function app
# CREATED: 14 OCT 2026
# ============================================================================
"""
Function App Configuration

Loads configuration from environment variables with sensible defaults.

Table auth follows the same order as the blob repository pattern:
- THINGS_STORAGE_CONNECTION_STRING → connection string (Azurite or account key)
- USE_MANAGED_IDENTITY=true + THINGS_STORAGE_ACCOUNT → azure-identity credential
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from __version__ import __version__

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in _TRUE_VALUES


@dataclass
class FunctionConfig:
    """Configuration for the function app."""

    # Table storage
    connection_string: Optional[str] = None
    storage_account: str = ""
    table_endpoint: Optional[str] = None
    table_name: str = "things"
    create_table: bool = False

    # Identity
    use_managed_identity: bool = False
    managed_identity_client_id: Optional[str] = None

    # App Info
    version: str = __version__
    service_name: str = "thingstore-api"

    @classmethod
    def from_env(cls) -> "FunctionConfig":
        """Load configuration from environment variables."""
        return cls(
            connection_string=os.environ.get("THINGS_STORAGE_CONNECTION_STRING") or None,
            storage_account=os.environ.get("THINGS_STORAGE_ACCOUNT", ""),
            table_endpoint=os.environ.get("THINGS_TABLE_ENDPOINT") or None,
            table_name=os.environ.get("THINGS_TABLE_NAME", "things"),
            create_table=_env_flag("THINGS_CREATE_TABLE"),
            use_managed_identity=_env_flag("USE_MANAGED_IDENTITY"),
            managed_identity_client_id=os.environ.get("AZURE_CLIENT_ID") or None,
            version=os.environ.get("APP_VERSION", __version__),
            service_name=os.environ.get("SERVICE_NAME", "thingstore-api"),
        )

    def get_table_endpoint(self) -> str:
        """
        Get the table service endpoint for credential-based auth.

        An explicit THINGS_TABLE_ENDPOINT wins over the account-derived URL.
        """
        if self.table_endpoint:
            return self.table_endpoint.rstrip("/")
        return f"https://{self.storage_account}.table.core.windows.net"

    @property
    def has_connection_string(self) -> bool:
        return bool(self.connection_string)

    @property
    def has_identity_config(self) -> bool:
        """Check if credential-based auth has enough to locate the account."""
        return self.use_managed_identity and bool(self.storage_account or self.table_endpoint)

    @property
    def has_table_config(self) -> bool:
        """Check if table storage is configured by either auth path."""
        return self.has_connection_string or self.has_identity_config

    @property
    def auth_mode(self) -> str:
        if self.has_connection_string:
            return "connection_string"
        if self.has_identity_config:
            return "managed_identity"
        return "unconfigured"


# Global config singleton
_config: Optional[FunctionConfig] = None


def get_config() -> FunctionConfig:
    """Get the global configuration singleton."""
    global _config
    if _config is None:
        _config = FunctionConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None


__all__ = ["FunctionConfig", "get_config", "reset_config"]
