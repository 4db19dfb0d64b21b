# ============================================================================
# THING STORE - Azure Function App
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Thing CRUD over Azure Table Storage
# PURPOSE: HTTP API for the things table
# CREATED: 14 OCT 2026
# ============================================================================
"""
Thing Store Function App

Azure Functions V2 entry point providing:
- CRUD over things stored in an Azure Storage table
- Health and configuration endpoints

Deployment:
- Azure Function App (Consumption or Premium plan)
- Storage account with a table (default name: things)

Endpoints:
- /api/livez - Liveness probe (always available)
- /api/readyz - Readiness probe (checks startup validation)
- /api/things, /api/things/{id} - Thing CRUD
- /api/admin/* - Administrative endpoints
"""

import azure.functions as func
import json
import logging

# ============================================================================
# CREATE APP FIRST (before any imports that might fail)
# ============================================================================

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger(__name__)
logger.info("=" * 60)
logger.info("Thing Store Function App Starting")
logger.info("=" * 60)

# ============================================================================
# EARLY PROBES (Before validation - always available)
# ============================================================================


@app.route(route="livez", methods=["GET"])
def liveness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """
    Liveness probe - always returns 200 if function is running.

    GET /api/livez
    """
    from function.config import get_config

    return func.HttpResponse(
        json.dumps({"alive": True, "service": get_config().service_name}),
        status_code=200,
        headers={"Content-Type": "application/json"},
    )


@app.route(route="readyz", methods=["GET"])
def readiness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """
    Readiness probe - returns 200 if startup validation passed.

    GET /api/readyz

    Returns 503 if startup validation failed.
    """
    from function.config import get_config
    from function.startup import STARTUP_STATE

    service = get_config().service_name

    if STARTUP_STATE.all_passed:
        return func.HttpResponse(
            json.dumps({"ready": True, "service": service}),
            status_code=200,
            headers={"Content-Type": "application/json"},
        )

    return func.HttpResponse(
        json.dumps({
            "ready": False,
            "service": service,
            "failed_checks": STARTUP_STATE.failed_check_names(),
            "details": STARTUP_STATE.to_dict(),
        }),
        status_code=503,
        headers={"Content-Type": "application/json"},
    )


# ============================================================================
# STARTUP VALIDATION
# ============================================================================
# If validation fails, only /livez and /readyz are available.

logger.info("Running startup validation...")

from function.startup import validate_startup, STARTUP_STATE

_startup_result = validate_startup()

if not STARTUP_STATE.all_passed:
    logger.error("=" * 60)
    logger.error("STARTUP VALIDATION FAILED")
    logger.error("=" * 60)
    logger.error("Only /api/livez and /api/readyz endpoints available")
    for check in STARTUP_STATE.failed_checks():
        logger.error(f"  FAILED: {check.name} - {check.error_message}")
    logger.error("=" * 60)
else:
    logger.info("Startup validation PASSED")


# ============================================================================
# BLUEPRINT REGISTRATION (Conditional on startup success)
# ============================================================================

if STARTUP_STATE.all_passed:
    logger.info("Registering blueprints...")

    from function.blueprints.things_bp import things_bp
    app.register_functions(things_bp)
    logger.info("  Registered: things_bp (thing CRUD)")

    from function.blueprints.admin_bp import admin_bp
    app.register_functions(admin_bp)
    logger.info("  Registered: admin_bp (admin endpoints)")

    logger.info("=" * 60)
    logger.info("Thing Store Function App Ready")
    logger.info("=" * 60)
else:
    logger.warning("=" * 60)
    logger.warning("SKIPPING blueprint registration - startup validation failed")
    logger.warning("=" * 60)


__all__ = ["app"]
