# ============================================================================
# STARTUP VALIDATION
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Startup validation
# PURPOSE: Validate environment before registering blueprints
# CREATED: 14 OCT 2026
# ============================================================================
"""
Startup Validation

Validates environment and table access before registering blueprints.
Fail fast, log clearly, degrade gracefully.

If validation fails, only /livez and /readyz endpoints are available.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from function.config import get_config

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a startup validation check."""

    name: str
    passed: bool
    error_type: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class StartupState:
    """Track all startup validation checks."""

    env_vars: ValidationResult = field(
        default_factory=lambda: ValidationResult("env_vars", False, "NotRun", "Validation not yet run")
    )
    table: ValidationResult = field(
        default_factory=lambda: ValidationResult("table", False, "NotRun", "Validation not yet run")
    )

    def _checks(self) -> List[ValidationResult]:
        return [self.env_vars, self.table]

    @property
    def all_passed(self) -> bool:
        """Check if all validations passed."""
        return all(c.passed for c in self._checks())

    def failed_checks(self) -> List[ValidationResult]:
        """Get list of failed validation checks."""
        return [c for c in self._checks() if not c.passed]

    def failed_check_names(self) -> List[str]:
        """Get names of failed checks."""
        return [c.name for c in self.failed_checks()]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "all_passed": self.all_passed,
            "checks": {
                c.name: {
                    "passed": c.passed,
                    "error": c.error_message if not c.passed else None,
                }
                for c in self._checks()
            },
        }


# Global singleton
STARTUP_STATE = StartupState()


def validate_startup() -> bool:
    """
    Run all startup validation checks.

    Returns True if all checks pass.
    Updates global STARTUP_STATE with results.
    """
    logger.info("Starting validation checks...")

    # 1. Environment Variables
    STARTUP_STATE.env_vars = _validate_env_vars()
    if STARTUP_STATE.env_vars.passed:
        logger.info("  [PASS] Environment variables")
    else:
        logger.error(f"  [FAIL] Environment variables: {STARTUP_STATE.env_vars.error_message}")

    # 2. Table access (only if env vars passed)
    if STARTUP_STATE.env_vars.passed:
        STARTUP_STATE.table = _validate_table()
        if STARTUP_STATE.table.passed:
            logger.info("  [PASS] Table access")
        else:
            logger.error(f"  [FAIL] Table access: {STARTUP_STATE.table.error_message}")
    else:
        STARTUP_STATE.table = ValidationResult(
            name="table",
            passed=False,
            error_type="Skipped",
            error_message="Skipped due to env_vars failure",
        )

    if STARTUP_STATE.all_passed:
        logger.info("All validation checks PASSED")
    else:
        logger.error(f"Validation FAILED: {STARTUP_STATE.failed_check_names()}")

    return STARTUP_STATE.all_passed


def _validate_env_vars() -> ValidationResult:
    """Validate required environment variables."""
    config = get_config()

    if not config.has_table_config:
        return ValidationResult(
            name="env_vars",
            passed=False,
            error_type="MissingEnvVar",
            error_message=(
                "THINGS_STORAGE_CONNECTION_STRING or "
                "USE_MANAGED_IDENTITY=true with THINGS_STORAGE_ACCOUNT required"
            ),
        )

    # Table service naming rule: 3-63 alphanumerics, leading letter
    name = config.table_name
    if not (3 <= len(name) <= 63 and name.isascii() and name.isalnum() and name[0].isalpha()):
        return ValidationResult(
            name="env_vars",
            passed=False,
            error_type="InvalidTableName",
            error_message=f"Table name '{name}' must be 3-63 alphanumeric characters starting with a letter",
        )

    return ValidationResult(name="env_vars", passed=True)


def _validate_table() -> ValidationResult:
    """Validate table access, creating the table first when configured to."""
    config = get_config()
    try:
        from function.repositories.thing_table_repo import ThingTableRepository

        with ThingTableRepository(config=config) as repo:
            if config.create_table:
                repo.ensure_table()
            repo.ping()
        return ValidationResult(name="table", passed=True)
    except Exception as e:
        return ValidationResult(
            name="table",
            passed=False,
            error_type=type(e).__name__,
            error_message=str(e),
        )


__all__ = ["STARTUP_STATE", "validate_startup", "ValidationResult", "StartupState"]
