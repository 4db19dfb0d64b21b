# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Model exports
# PURPOSE: Central export point for domain models
# CREATED: 14 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point
"""

from core.models.thing import Thing, is_valid_thing_id, new_thing_id

__all__ = [
    "Thing",
    "new_thing_id",
    "is_valid_thing_id",
]
