# serviceadapter/plans/schema.py

from __future__ import annotations

from typing import Any, Dict, List

import jsonschema

from serviceadapter.errors import MalformedInput

# ``null`` is accepted wherever a value is optional and decodes to the
# field's zero value. Unknown keys are allowed and ignored.

_STRING = {"type": ["string", "null"]}
_STRING_LIST = {"type": ["array", "null"], "items": {"type": "string"}}
_PROPERTIES = {"type": ["object", "null"]}

JOB_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": _STRING,
        "release": _STRING,
        "properties": _PROPERTIES,
    },
}

INSTANCE_GROUP_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": _STRING,
        "vm_type": _STRING,
        "persistent_disk_type": _STRING,
        "networks": _STRING_LIST,
        "azs": _STRING_LIST,
        "instances": {"type": ["integer", "null"]},
        "lifecycle": _STRING,
        "jobs": {"type": ["array", "null"], "items": JOB_SCHEMA},
    },
}

PLAN_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Plan",
    "type": "object",
    "properties": {
        "instance_groups": {"type": ["array", "null"], "items": INSTANCE_GROUP_SCHEMA},
        "properties": _PROPERTIES,
    },
}

_VALIDATOR = jsonschema.Draft7Validator(PLAN_SCHEMA)


def _sort_key(error: jsonschema.ValidationError):
    return [(0, p) if isinstance(p, int) else (1, str(p)) for p in error.absolute_path]


def _location(error: jsonschema.ValidationError) -> str:
    return ".".join(str(p) for p in error.absolute_path) or "<document>"


def shape_errors(doc: Any) -> List[str]:
    """
    Return every type/shape error in a decoded plan document, ordered by path.

    This checks the *serialized* representation, not the dataclasses, and
    says nothing about required values: an empty plan has the right shape.
    """
    errors = sorted(_VALIDATOR.iter_errors(doc), key=_sort_key)
    return [f"{_location(e)}: {e.message}" for e in errors]


def check_plan_document(doc: Any) -> None:
    """Raise MalformedInput if ``doc`` does not have the plan document shape."""
    errors = shape_errors(doc)
    if errors:
        raise MalformedInput("Plan document does not match the expected shape", errors)
