# ============================================================================
# THING CLIENT TOOL TESTS
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Tests - CLI REST client
# PURPOSE: Verify ThingApiClient requests, error mapping and the smoke run
# CREATED: 15 OCT 2026
# ============================================================================
"""
Thing Client Tool Tests

Uses unittest.mock to patch httpx calls, no real HTTP traffic.

Run with:
    pytest tests/test_thing_client.py -v
"""

import json
import logging
import pytest
from unittest.mock import MagicMock, patch

import httpx

from tools.thing_client import ThingApiClient, main, run_smoke


def _mock_response(status_code=200, json_data=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = b"" if json_data is None else json.dumps(json_data).encode()
    resp.json.return_value = json_data
    resp.text = resp.content.decode()
    return resp


@pytest.fixture
def http():
    with patch("tools.thing_client.httpx.Client") as mock_client_cls:
        mock_client = MagicMock()
        mock_client.__enter__ = MagicMock(return_value=mock_client)
        mock_client.__exit__ = MagicMock(return_value=False)
        mock_client_cls.return_value = mock_client
        yield mock_client


class TestThingApiClient:
    def test_list(self, http):
        http.request.return_value = _mock_response(200, [])
        client = ThingApiClient(base_url="http://app/api/")
        assert client.list_things(top=5) == (200, [])
        args, kwargs = http.request.call_args
        assert args == ("GET", "http://app/api/things")
        assert kwargs["params"] == {"top": "5"}

    def test_create(self, http):
        http.request.return_value = _mock_response(201, {"id": "abc", "name": "n"})
        status, body = ThingApiClient(base_url="http://app/api").create_thing("n", "d")
        assert status == 201
        assert body["id"] == "abc"
        assert http.request.call_args[1]["json"] == {"name": "n", "description": "d"}

    def test_update_sends_if_match(self, http):
        http.request.return_value = _mock_response(200, {"id": "abc"})
        ThingApiClient(base_url="http://app/api").update_thing("abc", {"name": "x"}, etag="e1")
        args, kwargs = http.request.call_args
        assert args == ("PUT", "http://app/api/things/abc")
        assert kwargs["headers"] == {"If-Match": "e1"}

    def test_delete_empty_body(self, http):
        http.request.return_value = _mock_response(204)
        assert ThingApiClient(base_url="http://app/api").delete_thing("abc") == (204, None)

    def test_base_url_from_env(self, http, monkeypatch):
        monkeypatch.setenv("THINGS_API_URL", "https://deployed.example/api")
        http.request.return_value = _mock_response(200, {"id": "abc"})
        ThingApiClient().get_thing("abc")
        assert http.request.call_args[0][1] == "https://deployed.example/api/things/abc"

    def test_connect_error_is_502(self, http):
        http.request.side_effect = httpx.ConnectError("Connection refused")
        status, body = ThingApiClient(base_url="http://app/api").list_things()
        assert status == 502
        assert "unreachable" in body["error"].lower()

    def test_timeout_is_504(self, http):
        http.request.side_effect = httpx.ReadTimeout("Read timed out")
        status, body = ThingApiClient(base_url="http://app/api").list_things()
        assert status == 504


class TestSmoke:
    def _client(self, **overrides):
        client = MagicMock()
        client.create_thing.return_value = (201, {"id": "abc", "etag": "e1"})
        client.get_thing.side_effect = [(200, {"id": "abc"}), (404, {"error": "Thing not found"})]
        client.list_things.return_value = (200, [{"id": "abc"}])
        client.update_thing.return_value = (200, {"id": "abc"})
        client.delete_thing.return_value = (204, None)
        for name, value in overrides.items():
            setattr(getattr(client, name), "return_value", value)
        return client

    def test_passes(self, capsys):
        client = self._client()
        assert run_smoke(client) is True
        client.update_thing.assert_called_once_with("abc", {"description": "updated by smoke"}, "e1")
        assert "FAIL" not in capsys.readouterr().out

    def test_missing_from_list_fails(self):
        assert run_smoke(self._client(list_things=(200, []))) is False

    def test_create_failure_aborts(self):
        client = self._client(create_thing=(500, {"error": "Storage error"}))
        assert run_smoke(client) is False
        client.get_thing.assert_not_called()


class TestMain:
    @pytest.fixture(autouse=True)
    def restore_root_logging(self):
        # main() installs its own root handler
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        yield
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    def test_get_prints_body(self, http, capsys):
        http.request.return_value = _mock_response(200, {"id": "abc"})
        assert main(["--base-url", "http://app/api", "get", "abc"]) == 0
        out = capsys.readouterr().out
        assert "HTTP 200" in out
        assert '"id": "abc"' in out

    def test_error_status_exit_code(self, http):
        http.request.return_value = _mock_response(404, {"error": "Thing not found"})
        assert main(["--base-url", "http://app/api", "get", "nope"]) == 1

    def test_update_requires_a_field(self, http):
        assert main(["--base-url", "http://app/api", "update", "abc"]) == 2
        http.request.assert_not_called()
