# ============================================================================
# FUNCTION APP BLUEPRINTS
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - HTTP endpoint blueprints
# PURPOSE: Azure Functions V2 blueprints for HTTP routes
# CREATED: 14 OCT 2026
# ============================================================================
"""
Function App Blueprints

Azure Functions V2 blueprints organizing HTTP endpoints.
Each blueprint is conditionally registered based on startup validation.
"""

from function.blueprints.things_bp import things_bp
from function.blueprints.admin_bp import admin_bp

__all__ = [
    "things_bp",
    "admin_bp",
]
