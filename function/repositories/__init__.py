# ============================================================================
# FUNCTION APP REPOSITORIES
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Storage access layer
# PURPOSE: Table storage repositories
# CREATED: 14 OCT 2026
# ============================================================================
"""
Function App Repositories

Sync repositories over Azure Table Storage.
"""

from function.repositories.thing_table_repo import ThingTableRepository, build_table_client

__all__ = [
    "ThingTableRepository",
    "build_table_client",
]
