from datetime import datetime, timezone
from typing import Any, Optional

from flask import jsonify, request
from marshmallow import Schema
from marshmallow import ValidationError as SchemaValidationError
from pydantic import BaseModel

from store_admin.core.exceptions import ValidationError


def to_payload(data: Any) -> Any:
    """Turn pydantic models (or lists of them) into JSON-ready values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [to_payload(item) for item in data]
    return data


def success_response(data, message: Optional[str] = None, status: int = 200):
    """Consistent success response envelope."""
    response = {
        "success": True,
        "data": to_payload(data),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if message:
        response["message"] = message
    return jsonify(response), status


def load_json_body(schema: Schema):
    """Validate the JSON request body against a marshmallow schema."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    try:
        return schema.load(body)
    except SchemaValidationError as err:
        raise ValidationError("Invalid request body.", field_errors=err.messages)
