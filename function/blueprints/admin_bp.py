# ============================================================================
# ADMIN BLUEPRINT
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Administrative endpoints
# PURPOSE: Health and configuration endpoints
# CREATED: 14 OCT 2026
# ============================================================================
"""
Admin Blueprint

Administrative endpoints:
- GET /api/admin/health - Table connectivity check
- GET /api/admin/config - Show configuration (non-sensitive)
"""

import json
import logging

import azure.functions as func

from function.config import get_config
from function.models.responses import HealthResponse
from function.repositories.thing_table_repo import ThingTableRepository

logger = logging.getLogger(__name__)
admin_bp = func.Blueprint()


def _json_response(data: dict, status_code: int = 200) -> func.HttpResponse:
    """Create JSON HTTP response."""
    return func.HttpResponse(
        json.dumps(data, default=str),
        status_code=status_code,
        headers={"Content-Type": "application/json"},
    )


@admin_bp.route(route="admin/health", methods=["GET"])
def admin_health(req: func.HttpRequest) -> func.HttpResponse:
    """
    Comprehensive health check.

    GET /api/admin/health

    Probes the things table. Always 200; status is "degraded" when the
    table cannot be reached.
    """
    config = get_config()
    checks = {}

    try:
        with ThingTableRepository(config=config) as repo:
            repo.ping()
        checks["table"] = {"status": "healthy", "table_name": config.table_name}
    except Exception as e:
        logger.warning(f"Table health check failed: {e}")
        checks["table"] = {"status": "unhealthy", "error": str(e)}

    checks["auth"] = {"mode": config.auth_mode}

    all_healthy = checks["table"].get("status") == "healthy"

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        service=config.service_name,
        version=config.version,
        checks=checks,
    )
    return _json_response(response.model_dump(mode="json"))


@admin_bp.route(route="admin/config", methods=["GET"])
def admin_config(req: func.HttpRequest) -> func.HttpResponse:
    """
    Show current configuration (non-sensitive values only).

    GET /api/admin/config
    """
    config = get_config()

    # Connection strings carry account keys; never expose them
    safe_config = {
        "table_name": config.table_name,
        "auth_mode": config.auth_mode,
        "storage_account": config.storage_account or None,
        "table_endpoint": config.get_table_endpoint() if config.has_identity_config else None,
        "create_table": config.create_table,
        "version": config.version,
        "service_name": config.service_name,
    }

    return _json_response({"config": safe_config})


__all__ = ["admin_bp"]
