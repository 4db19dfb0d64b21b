# ============================================================================
# FUNCTION APP MODULE
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Azure Function App components
# PURPOSE: Thing CRUD API over Azure Table Storage
# CREATED: 14 OCT 2026
# ============================================================================
"""
Function App Module

Contains all components specific to the Azure Function App deployment:
- Blueprints (HTTP endpoints)
- Models (request/response schemas)
- Repositories (table storage access)
- Startup validation
"""

__all__ = []
