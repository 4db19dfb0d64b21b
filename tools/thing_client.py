#!/usr/bin/env python3
# ============================================================================
# CLI THING API CLIENT
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Tool - Exercise the things endpoints over HTTP
# PURPOSE: REST client for a local or deployed function app
# CREATED: 15 OCT 2026
# ============================================================================
"""
Call the Thing Store HTTP API.

Works against the local Functions host (func start) or a deployed app.

Usage:
    # List things
    python tools/thing_client.py list

    # Create a thing
    python tools/thing_client.py create "Thing 1" --description "The first thing"

    # Get, update, delete
    python tools/thing_client.py get <id>
    python tools/thing_client.py update <id> --description "Changed" --if-match '<etag>'
    python tools/thing_client.py delete <id>

    # Full create -> get -> list -> update -> delete cycle
    python tools/thing_client.py smoke

Base URL:
    --base-url, or THINGS_API_URL env var (default http://localhost:7071/api)
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, Optional, Tuple

import httpx

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.logging import ComponentType, configure_logging, get_logger

logger = get_logger("tools.thing_client", ComponentType.TOOL)

DEFAULT_BASE_URL = "http://localhost:7071/api"
DEFAULT_TIMEOUT = httpx.Timeout(connect=10.0, read=30.0, write=10.0, pool=10.0)


class ThingApiClient:
    """
    Sync HTTP client for the things endpoints.

    All methods return (status_code, body) tuples. Body is the parsed JSON,
    None for an empty response, or {"detail": text} for non-JSON bodies.
    Transport failures come back as 502 (unreachable) or 504 (timeout).
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[httpx.Timeout] = None):
        self._base_url = (base_url or os.environ.get("THINGS_API_URL") or DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout or DEFAULT_TIMEOUT

    def _request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Tuple[int, Any]:
        url = f"{self._base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.request(method, url, json=json_body, params=params, headers=headers)
        except httpx.ConnectError as e:
            logger.error(f"Cannot reach {url}: {e}")
            return 502, {"error": "API unreachable", "detail": str(e)}
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling {url}: {e}")
            return 504, {"error": "API timeout", "detail": str(e)}

        if not resp.content:
            return resp.status_code, None
        try:
            return resp.status_code, resp.json()
        except ValueError:
            return resp.status_code, {"detail": resp.text}

    @staticmethod
    def _if_match(etag: Optional[str]) -> Optional[Dict[str, str]]:
        return {"If-Match": etag} if etag else None

    def list_things(self, top: Optional[int] = None) -> Tuple[int, Any]:
        """GET /things"""
        params = {"top": str(top)} if top else None
        return self._request("GET", "/things", params=params)

    def create_thing(self, name: str, description: str = "") -> Tuple[int, Any]:
        """POST /things"""
        return self._request("POST", "/things", json_body={"name": name, "description": description})

    def get_thing(self, thing_id: str) -> Tuple[int, Any]:
        """GET /things/{id}"""
        return self._request("GET", f"/things/{thing_id}")

    def update_thing(
        self, thing_id: str, changes: Dict[str, Any], etag: Optional[str] = None
    ) -> Tuple[int, Any]:
        """PUT /things/{id}"""
        return self._request(
            "PUT", f"/things/{thing_id}", json_body=changes, headers=self._if_match(etag)
        )

    def delete_thing(self, thing_id: str, etag: Optional[str] = None) -> Tuple[int, Any]:
        """DELETE /things/{id}"""
        return self._request("DELETE", f"/things/{thing_id}", headers=self._if_match(etag))


def run_smoke(client: ThingApiClient) -> bool:
    """
    Run create -> get -> list -> update -> delete -> get.

    Prints one line per step. Returns True when every step returned its
    expected status.
    """
    steps = []

    def step(label: str, expected: int, result: Tuple[int, Any]) -> Any:
        status, body = result
        ok = status == expected
        steps.append(ok)
        print(f"  [{'PASS' if ok else 'FAIL'}] {label}: {status} (expected {expected})")
        return body

    created = step("create", 201, client.create_thing("smoke-test", "created by thing_client smoke"))
    if not isinstance(created, dict) or "id" not in created:
        print("  Aborting: create returned no id")
        return False

    thing_id = created["id"]
    step("get", 200, client.get_thing(thing_id))

    listed = step("list", 200, client.list_things())
    found = isinstance(listed, list) and any(t.get("id") == thing_id for t in listed)
    steps.append(found)
    print(f"  [{'PASS' if found else 'FAIL'}] list contains {thing_id}")

    step("update", 200, client.update_thing(thing_id, {"description": "updated by smoke"}, created.get("etag")))
    step("delete", 204, client.delete_thing(thing_id))
    step("get after delete", 404, client.get_thing(thing_id))

    return all(steps)


def _print(status: int, body: Any) -> int:
    print(f"HTTP {status}")
    if body is not None:
        print(json.dumps(body, indent=2, default=str))
    return 0 if status < 400 else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Call the Thing Store HTTP API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s create "Thing 1" --description "The first thing"
  %(prog)s update <id> --name "Renamed"
  %(prog)s smoke --base-url https://myapp.azurewebsites.net/api
        """,
    )
    parser.add_argument(
        "--base-url", "-u",
        default=None,
        help=f"API base URL (default: $THINGS_API_URL or {DEFAULT_BASE_URL})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests")

    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List things")
    p_list.add_argument("--top", type=int, default=None, help="Maximum number of things")

    p_get = sub.add_parser("get", help="Get a thing")
    p_get.add_argument("id")

    p_create = sub.add_parser("create", help="Create a thing")
    p_create.add_argument("name")
    p_create.add_argument("--description", "-d", default="")

    p_update = sub.add_parser("update", help="Update a thing (only given fields change)")
    p_update.add_argument("id")
    p_update.add_argument("--name", default=None)
    p_update.add_argument("--description", "-d", default=None)
    p_update.add_argument("--if-match", default=None, help="Only update if the etag matches")

    p_delete = sub.add_parser("delete", help="Delete a thing")
    p_delete.add_argument("id")
    p_delete.add_argument("--if-match", default=None, help="Only delete if the etag matches")

    sub.add_parser("smoke", help="Run a full CRUD cycle")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else "WARNING")

    client = ThingApiClient(base_url=args.base_url)

    if args.command == "list":
        return _print(*client.list_things(top=args.top))
    if args.command == "get":
        return _print(*client.get_thing(args.id))
    if args.command == "create":
        return _print(*client.create_thing(args.name, args.description))
    if args.command == "update":
        changes = {k: v for k, v in (("name", args.name), ("description", args.description)) if v is not None}
        if not changes:
            print("ERROR: give --name and/or --description", file=sys.stderr)
            return 2
        return _print(*client.update_thing(args.id, changes, args.if_match))
    if args.command == "delete":
        return _print(*client.delete_thing(args.id, args.if_match))

    print(f"Smoke test against {client._base_url}")
    passed = run_smoke(client)
    print("\nSMOKE PASSED" if passed else "\nSMOKE FAILED")
    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(main())
