# ============================================================================
# CONFIG + STARTUP TESTS
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Tests - Configuration and startup validation
# PURPOSE: Verify env parsing, auth selection and readiness gating
# CREATED: 15 OCT 2026
# ============================================================================
"""
Config + Startup Tests

Run with:
    pytest tests/test_config_startup.py -v
"""

import importlib
import json
import pytest
from unittest.mock import MagicMock, patch

import azure.functions as func

from __version__ import __version__
from function import startup
from function.config import FunctionConfig, get_config
from function.startup import StartupState, ValidationResult, validate_startup

admin_module = importlib.import_module("function.blueprints.admin_bp")


def _call(function_builder, req=None):
    req = req or func.HttpRequest(method="GET", url="/api/x", body=b"")
    return function_builder.build().get_user_function()(req)


# ============================================================================
# CONFIG
# ============================================================================


class TestFunctionConfig:
    def test_defaults(self):
        config = get_config()
        assert config.table_name == "things"
        assert config.create_table is False
        assert config.version == __version__
        assert config.auth_mode == "unconfigured"
        assert not config.has_table_config

    def test_connection_string(self, monkeypatch):
        monkeypatch.setenv("THINGS_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
        monkeypatch.setenv("THINGS_TABLE_NAME", "widgets")
        monkeypatch.setenv("THINGS_CREATE_TABLE", "TRUE")
        config = FunctionConfig.from_env()
        assert config.auth_mode == "connection_string"
        assert config.table_name == "widgets"
        assert config.create_table is True

    def test_managed_identity(self, monkeypatch):
        monkeypatch.setenv("USE_MANAGED_IDENTITY", "true")
        monkeypatch.setenv("THINGS_STORAGE_ACCOUNT", "acct")
        monkeypatch.setenv("AZURE_CLIENT_ID", "cid")
        config = FunctionConfig.from_env()
        assert config.auth_mode == "managed_identity"
        assert config.managed_identity_client_id == "cid"
        assert config.get_table_endpoint() == "https://acct.table.core.windows.net"

    def test_account_without_identity_flag_is_unconfigured(self, monkeypatch):
        monkeypatch.setenv("THINGS_STORAGE_ACCOUNT", "acct")
        assert not FunctionConfig.from_env().has_table_config

    def test_endpoint_override(self):
        config = FunctionConfig(use_managed_identity=True, table_endpoint="http://127.0.0.1:10002/devstoreaccount1/")
        assert config.get_table_endpoint() == "http://127.0.0.1:10002/devstoreaccount1"

    def test_singleton(self):
        assert get_config() is get_config()


# ============================================================================
# STARTUP
# ============================================================================


class TestStartupValidation:
    def test_missing_env_skips_table(self):
        with patch.object(startup, "STARTUP_STATE", StartupState()):
            assert validate_startup() is False
            state = startup.STARTUP_STATE
            assert state.failed_check_names() == ["env_vars", "table"]
            assert state.table.error_type == "Skipped"

    @pytest.mark.parametrize("name", ["ab", "1things", "my-things", "x" * 64])
    def test_invalid_table_name(self, monkeypatch, name):
        monkeypatch.setenv("THINGS_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
        monkeypatch.setenv("THINGS_TABLE_NAME", name)
        result = startup._validate_env_vars()
        assert not result.passed
        assert result.error_type == "InvalidTableName"

    @patch("function.repositories.thing_table_repo.build_table_client")
    def test_all_pass(self, mock_build, monkeypatch):
        monkeypatch.setenv("THINGS_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
        client = MagicMock()
        client.list_entities.return_value = iter([])
        mock_build.return_value = client

        with patch.object(startup, "STARTUP_STATE", StartupState()):
            assert validate_startup() is True
            assert startup.STARTUP_STATE.to_dict()["all_passed"] is True
        client.create_table.assert_not_called()

    @patch("function.repositories.thing_table_repo.build_table_client")
    def test_creates_table_when_configured(self, mock_build, monkeypatch):
        monkeypatch.setenv("THINGS_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
        monkeypatch.setenv("THINGS_CREATE_TABLE", "true")
        client = MagicMock()
        client.list_entities.return_value = iter([])
        mock_build.return_value = client

        assert startup._validate_table().passed
        client.create_table.assert_called_once()

    @patch("function.repositories.thing_table_repo.build_table_client")
    def test_unreachable_table(self, mock_build, monkeypatch):
        monkeypatch.setenv("THINGS_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
        client = MagicMock()
        client.list_entities.side_effect = ConnectionError("refused")
        mock_build.return_value = client

        result = startup._validate_table()
        assert not result.passed
        assert result.error_type == "ConnectionError"
        assert "refused" in result.error_message


class TestStartupState:
    def test_not_run_fails(self):
        state = StartupState()
        assert not state.all_passed
        assert state.env_vars.error_type == "NotRun"

    def test_to_dict_hides_passed_errors(self):
        state = StartupState(
            env_vars=ValidationResult("env_vars", True),
            table=ValidationResult("table", False, "X", "broken"),
        )
        data = state.to_dict()
        assert data["checks"]["env_vars"] == {"passed": True, "error": None}
        assert data["checks"]["table"] == {"passed": False, "error": "broken"}


# ============================================================================
# ADMIN BLUEPRINT
# ============================================================================


class TestAdminEndpoints:
    @patch.object(admin_module, "ThingTableRepository")
    def test_health_healthy(self, mock_repo_cls, monkeypatch):
        monkeypatch.setenv("THINGS_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
        resp = _call(admin_module.admin_health)
        data = json.loads(resp.get_body())
        assert resp.status_code == 200
        assert data["status"] == "healthy"
        assert data["checks"]["table"]["status"] == "healthy"
        assert data["checks"]["auth"]["mode"] == "connection_string"

    @patch.object(admin_module, "ThingTableRepository")
    def test_health_degraded(self, mock_repo_cls):
        repo = mock_repo_cls.return_value
        repo.__enter__.return_value = repo
        repo.__exit__.return_value = False
        repo.ping.side_effect = RuntimeError("down")
        data = json.loads(_call(admin_module.admin_health).get_body())
        assert data["status"] == "degraded"
        assert "down" in data["checks"]["table"]["error"]

    def test_config_hides_connection_string(self, monkeypatch):
        secret = "DefaultEndpointsProtocol=https;AccountName=a;AccountKey=SECRET"
        monkeypatch.setenv("THINGS_STORAGE_CONNECTION_STRING", secret)
        body = _call(admin_module.admin_config).get_body().decode()
        assert "SECRET" not in body
        assert json.loads(body)["config"]["auth_mode"] == "connection_string"
