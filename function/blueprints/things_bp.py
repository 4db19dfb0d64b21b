# ============================================================================
# THINGS BLUEPRINT
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Thing CRUD endpoints
# PURPOSE: HTTP endpoints for creating, reading, updating and deleting things
# CREATED: 14 OCT 2026
# ============================================================================
"""
Things Blueprint

CRUD endpoints served directly from the things table:
- GET    /api/things          - List things
- POST   /api/things          - Create thing (201)
- GET    /api/things/{id}     - Get thing
- PUT    /api/things/{id}     - Partial update (merge)
- DELETE /api/things/{id}     - Delete thing (204, idempotent)

PUT and DELETE honour an optional If-Match header; a stale etag is 412.
"""

import json
from typing import Optional

import azure.functions as func
from azure.core.exceptions import ResourceModifiedError
from pydantic import ValidationError

from core.logging import ComponentType, get_logger, log_context
from core.models.thing import Thing, is_valid_thing_id
from function.models.requests import ThingCreateRequest, ThingListQuery, ThingUpdateRequest
from function.models.responses import ErrorResponse
from function.repositories.thing_table_repo import ThingTableRepository

logger = get_logger(__name__, ComponentType.API)
things_bp = func.Blueprint()


# ============================================================================
# HELPERS
# ============================================================================

def _json_response(data, status_code: int = 200, headers: Optional[dict] = None) -> func.HttpResponse:
    """Create JSON HTTP response."""
    all_headers = {"Content-Type": "application/json"}
    if headers:
        all_headers.update(headers)
    return func.HttpResponse(
        json.dumps(data, default=str),
        status_code=status_code,
        headers=all_headers,
    )


def _error(error: str, details: str = None, status_code: int = 400, code: str = None) -> func.HttpResponse:
    """Create error response."""
    return _json_response(
        ErrorResponse(error=error, details=details, code=code).model_dump(),
        status_code=status_code,
    )


def _thing_response(thing: Thing, status_code: int = 200, headers: Optional[dict] = None) -> func.HttpResponse:
    """Serialize a thing and expose its etag as the ETag header."""
    all_headers = dict(headers or {})
    if thing.etag:
        all_headers["ETag"] = thing.etag
    return _json_response(thing.model_dump(mode="json"), status_code, all_headers)


def _validation_error(e: ValidationError) -> func.HttpResponse:
    messages = [
        f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
        for err in e.errors()
    ]
    return _error("Validation error", "; ".join(messages), 422, "VALIDATION_ERROR")


def _read_json(req: func.HttpRequest):
    """Parse the request body; raises ValueError on empty or malformed JSON."""
    try:
        return req.get_json()
    except ValueError:
        raise ValueError("Request body must be valid JSON")


def _if_match(req: func.HttpRequest) -> Optional[str]:
    return req.headers.get("If-Match") or None


def _new_repo() -> ThingTableRepository:
    return ThingTableRepository()


def _not_found(thing_id: str) -> func.HttpResponse:
    return _error("Thing not found", f"No thing with ID '{thing_id}'", 404, "NOT_FOUND")


# ============================================================================
# COLLECTION
# ============================================================================

@things_bp.route(route="things", methods=["GET"])
def things_list(req: func.HttpRequest) -> func.HttpResponse:
    """
    List things.

    GET /api/things
    Query params: top (optional, 1..1000)

    Returns a JSON array, empty when no things exist.
    """
    try:
        query = ThingListQuery.model_validate(dict(req.params))
    except ValidationError as e:
        return _validation_error(e)

    with log_context(operation="list_things"):
        try:
            with _new_repo() as repo:
                things = repo.list_things(top=query.top)
        except Exception as e:
            logger.exception(f"Error listing things: {e}")
            return _error("Storage error", str(e), 500, "STORAGE_ERROR")

        logger.info(f"Listed {len(things)} things")
        return _json_response([t.model_dump(mode="json") for t in things])


@things_bp.route(route="things", methods=["POST"])
def things_create(req: func.HttpRequest) -> func.HttpResponse:
    """
    Create a thing.

    POST /api/things
    Body: {"name": "...", "description": "..."}

    The server assigns the id. Returns 201 with the stored thing.
    """
    try:
        body = _read_json(req)
    except ValueError as e:
        return _error("Invalid request", str(e), 400, "INVALID_JSON")

    try:
        request = ThingCreateRequest.model_validate(body)
    except ValidationError as e:
        return _validation_error(e)

    with log_context(operation="create_thing"):
        try:
            with _new_repo() as repo:
                thing = repo.create_thing(request.name, request.description)
        except Exception as e:
            logger.exception(f"Error creating thing: {e}")
            return _error("Storage error", str(e), 500, "STORAGE_ERROR")

        return _thing_response(thing, 201, {"Location": f"/api/things/{thing.id}"})


# ============================================================================
# ITEM
# ============================================================================

@things_bp.route(route="things/{id}", methods=["GET"])
def things_get(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get a thing.

    GET /api/things/{id}
    """
    thing_id = req.route_params.get("id")
    if not is_valid_thing_id(thing_id):
        return _not_found(thing_id)

    with log_context(operation="get_thing", thing_id=thing_id):
        try:
            with _new_repo() as repo:
                thing = repo.get_thing(thing_id)
        except Exception as e:
            logger.exception(f"Error fetching thing: {e}")
            return _error("Storage error", str(e), 500, "STORAGE_ERROR")

        if thing is None:
            return _not_found(thing_id)

        return _thing_response(thing)


@things_bp.route(route="things/{id}", methods=["PUT"])
def things_update(req: func.HttpRequest) -> func.HttpResponse:
    """
    Update a thing.

    PUT /api/things/{id}
    Body: any of {"name": "...", "description": "..."}
    Headers: If-Match (optional etag)

    Fields absent from the body keep their stored values.
    """
    thing_id = req.route_params.get("id")
    if not is_valid_thing_id(thing_id):
        return _not_found(thing_id)

    try:
        body = _read_json(req)
    except ValueError as e:
        return _error("Invalid request", str(e), 400, "INVALID_JSON")

    try:
        request = ThingUpdateRequest.model_validate(body)
    except ValidationError as e:
        return _validation_error(e)

    with log_context(operation="update_thing", thing_id=thing_id):
        try:
            with _new_repo() as repo:
                thing = repo.update_thing(thing_id, request.changes(), etag=_if_match(req))
        except ResourceModifiedError as e:
            logger.warning(f"Etag mismatch updating thing: {e}")
            return _error("Precondition failed", "Thing was modified since the given ETag", 412, "ETAG_MISMATCH")
        except Exception as e:
            logger.exception(f"Error updating thing: {e}")
            return _error("Storage error", str(e), 500, "STORAGE_ERROR")

        if thing is None:
            return _not_found(thing_id)

        return _thing_response(thing)


@things_bp.route(route="things/{id}", methods=["DELETE"])
def things_delete(req: func.HttpRequest) -> func.HttpResponse:
    """
    Delete a thing.

    DELETE /api/things/{id}
    Headers: If-Match (optional etag)

    Returns 204 whether or not the thing existed.
    """
    thing_id = req.route_params.get("id")
    # No stored thing can carry an unusable key
    if not is_valid_thing_id(thing_id):
        return func.HttpResponse(status_code=204)

    with log_context(operation="delete_thing", thing_id=thing_id):
        try:
            with _new_repo() as repo:
                repo.delete_thing(thing_id, etag=_if_match(req))
        except ResourceModifiedError as e:
            logger.warning(f"Etag mismatch deleting thing: {e}")
            return _error("Precondition failed", "Thing was modified since the given ETag", 412, "ETAG_MISMATCH")
        except Exception as e:
            logger.exception(f"Error deleting thing: {e}")
            return _error("Storage error", str(e), 500, "STORAGE_ERROR")

        return func.HttpResponse(status_code=204)


__all__ = ["things_bp"]
