# ============================================================================
# VERSION - THING STORE
# ============================================================================
# EPOCH: 1 - THING STORE
# ============================================================================
"""
Version information for the Thing Store function app.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch
__version__ = "1.0.0"
