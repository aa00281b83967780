"""Body and path-parameter parsing shared by the API routes."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from folio.utils.validators import (
    InvalidIdError,
    parse_integer_id,
    validate_required_fields,
    validate_uuid,
)
from folio.web.errors import ApiError

ModelT = TypeVar("ModelT", bound=BaseModel)


async def parse_request_body(request: Request) -> dict[str, Any]:
    """Read a JSON object body.

    Raises:
        ApiError: 400 on wrong content type, empty body, invalid JSON
            or a body that is not an object
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" not in content_type:
        raise ApiError(400, "Content-Type must be application/json")

    raw = await request.body()
    if not raw.strip():
        raise ApiError(400, "Request body is required")

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ApiError(400, "Invalid JSON format")

    if not isinstance(data, dict):
        raise ApiError(400, "Request body must be a JSON object")

    return data


def require_fields(data: dict[str, Any], fields: list[str]) -> None:
    """Raise 400 listing every missing required field."""
    missing = validate_required_fields(data, fields)
    if missing:
        raise ApiError(400, f"Missing required fields: {', '.join(missing)}")


def build_payload(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate a parsed body into an input model (400 on failure)."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise ApiError(400, f"Invalid {field}: {first['msg']}")


def uuid_param(raw: str, label: str) -> str:
    """Validate a UUID path parameter."""
    try:
        return validate_uuid(raw)
    except InvalidIdError:
        raise ApiError(400, f"Invalid {label} ID format")


def int_param(raw: str) -> int:
    """Validate a positive integer path parameter."""
    try:
        return parse_integer_id(raw)
    except InvalidIdError as e:
        raise ApiError(400, str(e))
