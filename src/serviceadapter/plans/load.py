# serviceadapter/plans/load.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from serviceadapter.errors import MalformedInput
from serviceadapter.plans.schema import check_plan_document
from serviceadapter.plans.types import InstanceGroup, Job, Plan, Properties

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yml", ".yaml"}

_SCALARS = (str, float, type(None))


def normalize_numbers(value: Any, path: str = "properties", errors: Optional[List[str]] = None) -> Any:
    """
    Recursively turn every integer inside a property value into a float.

    Decoded bags do not keep the integer/decimal distinction of the source
    text. Booleans are left alone. Anything that is not JSON data (YAML
    timestamps, non-string keys) is reported into ``errors`` by path; when
    no list is given the first one raises MalformedInput.
    """
    if errors is None:
        found: List[str] = []
        result = normalize_numbers(value, path, found)
        if found:
            raise MalformedInput("Property bag holds values that are not plain data", found)
        return result

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return float(value)
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, dict):
        out = {}
        for k, v in value.items():
            if not isinstance(k, str):
                errors.append(f"{path}: key {k!r} is not a string")
                continue
            out[k] = normalize_numbers(v, f"{path}.{k}", errors)
        return out
    if isinstance(value, list):
        return [normalize_numbers(v, f"{path}.{i}", errors) for i, v in enumerate(value)]
    errors.append(f"{path}: {type(value).__name__} value {value!r} is not allowed in a property bag")
    return value


def _properties(d: Dict[str, Any], path: str, errors: List[str]) -> Optional[Properties]:
    bag = d.get("properties")
    if bag is None:
        return None
    return normalize_numbers(bag, path, errors)


def _job_from_dict(d: Dict[str, Any], path: str, errors: List[str]) -> Job:
    return Job(
        name=d.get("name") or "",
        release=d.get("release") or "",
        properties=_properties(d, f"{path}.properties", errors),
    )


def _instance_group_from_dict(d: Dict[str, Any], path: str, errors: List[str]) -> InstanceGroup:
    instances = d.get("instances")
    return InstanceGroup(
        name=d.get("name") or "",
        vm_type=d.get("vm_type") or "",
        networks=list(d.get("networks") or []),
        instances=int(instances) if instances is not None else 0,
        persistent_disk_type=d.get("persistent_disk_type") or None,
        azs=list(d.get("azs") or []),
        lifecycle=d.get("lifecycle") or None,
        jobs=[
            _job_from_dict(j, f"{path}.jobs.{i}", errors)
            for i, j in enumerate(d.get("jobs") or [])
        ],
    )


def plan_from_dict(doc: Any) -> Plan:
    """
    Build a Plan from an already-parsed document.

    Unknown keys are ignored. Missing or null optional fields decode to
    their zero value; a missing job ``properties`` stays ``None`` so the
    validator can tell it apart from an empty bag. Property bags may only
    hold string keys and JSON values.
    """
    errors: List[str] = []
    try:
        check_plan_document(doc)
        groups: List[InstanceGroup] = [
            _instance_group_from_dict(g, f"instance_groups.{i}", errors)
            for i, g in enumerate(doc.get("instance_groups") or [])
        ]
        properties = _properties(doc, "properties", errors)
    except RecursionError as e:
        raise MalformedInput("Plan document is nested too deeply") from e

    if errors:
        raise MalformedInput("Plan document does not match the expected shape", errors)

    plan = Plan(instance_groups=groups, properties=properties)
    logger.debug("decoded plan with %d instance group(s)", len(groups))
    return plan


def decode_plan(text: Union[str, bytes]) -> Plan:
    """Decode a plan from JSON text."""
    try:
        doc = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedInput(f"Plan is not valid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedInput("Plan JSON is nested too deeply") from e
    return plan_from_dict(doc)


def decode_plan_yaml(text: Union[str, bytes]) -> Plan:
    """Decode a plan from YAML text (same keys as the JSON form)."""
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedInput(f"Plan is not valid YAML: {e}") from e
    except RecursionError as e:
        raise MalformedInput("Plan YAML is nested too deeply") from e
    return plan_from_dict(doc)


DECODERS = {
    "json": decode_plan,
    "yaml": decode_plan_yaml,
}


def load_plan(path: Union[str, Path], fmt: Optional[str] = None) -> Plan:
    """
    Load a plan file.

    ``fmt`` is "json" or "yaml"; when omitted it is picked from the suffix
    (.yml/.yaml are YAML, anything else JSON).
    """
    path = Path(path).expanduser().resolve()
    if not path.is_file():
        raise FileNotFoundError(path)

    fmt = fmt or ("yaml" if path.suffix.lower() in YAML_SUFFIXES else "json")
    if fmt not in DECODERS:
        raise ValueError(f"Unknown plan format '{fmt}'. Choose one of {sorted(DECODERS)}")

    logger.debug("loading %s plan from %s", fmt, path)
    try:
        return DECODERS[fmt](path.read_text(encoding="utf-8"))
    except MalformedInput as e:
        raise MalformedInput(f"{path}: {e.reason}", e.errors) from e
