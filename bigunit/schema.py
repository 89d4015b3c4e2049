"""JSON schema for the structured {magnitude, precision, label} form of a unit."""

from typing import Any, Dict

import jsonschema

from bigunit.errors import InvalidValueType

UNIT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "BigUnit",
    "type": "object",
    "properties": {
        "magnitude": {
            "oneOf": [
                {"type": "string", "pattern": "^-?[0-9]+$"},
                {"type": "integer"},
            ]
        },
        # Whole-number and sign checks happen in the constructor so they
        # surface as InvalidPrecision rather than a schema failure.
        "precision": {"type": "number"},
        "label": {"type": ["string", "null"]},
    },
    "required": ["magnitude", "precision"],
    "additionalProperties": False,
}


def validate_unit_object(data: Any) -> None:
    try:
        jsonschema.validate(instance=data, schema=UNIT_SCHEMA)
    except jsonschema.ValidationError as e:
        raise InvalidValueType(data, f"invalid unit object: {e.message}") from e
