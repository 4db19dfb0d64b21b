# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Core module initialization
# PURPOSE: Export domain models and logging utilities
# CREATED: 14 OCT 2026
# ============================================================================

from core.models import Thing

__all__ = [
    "Thing",
]
