# serviceadapter/plans/emit.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from serviceadapter.plans.load import YAML_SUFFIXES
from serviceadapter.plans.types import InstanceGroup, Job, Plan

logger = logging.getLogger(__name__)


def _job_to_dict(job: Job) -> Dict[str, Any]:
    # An undefined job bag stays null so the defect survives a round trip.
    return {
        "name": job.name,
        "release": job.release,
        "properties": dict(job.properties) if job.properties is not None else None,
    }


def _instance_group_to_dict(group: InstanceGroup) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "name": group.name,
        "vm_type": group.vm_type,
    }
    if group.persistent_disk_type:
        d["persistent_disk_type"] = group.persistent_disk_type
    d["networks"] = list(group.networks or [])
    if group.azs:
        d["azs"] = list(group.azs)
    d["instances"] = group.instances
    if group.lifecycle:
        d["lifecycle"] = group.lifecycle
    if group.jobs:
        d["jobs"] = [_job_to_dict(j) for j in group.jobs]
    return d


def plan_to_dict(plan: Plan) -> Dict[str, Any]:
    """
    Serialize a Plan into a plain, insertion-ordered dict.

    Optional instance group fields (persistent_disk_type, azs, lifecycle,
    jobs) are left out when empty. ``properties`` is always present and is
    ``{}`` rather than null when nothing is defined.
    """
    return {
        "instance_groups": [_instance_group_to_dict(g) for g in plan.instance_groups or []],
        "properties": dict(plan.properties or {}),
    }


def encode_plan(plan: Plan, indent: Optional[int] = None) -> str:
    """Encode a plan as JSON text."""
    text = json.dumps(plan_to_dict(plan), indent=indent, ensure_ascii=False)
    logger.debug("encoded plan with %d instance group(s)", len(plan.instance_groups or []))
    return text


def encode_plan_yaml(plan: Plan) -> str:
    """Encode a plan as YAML text, keeping the JSON key order."""
    return yaml.safe_dump(plan_to_dict(plan), sort_keys=False, default_flow_style=False)


ENCODERS = {
    "json": lambda plan: encode_plan(plan, indent=2) + "\n",
    "yaml": encode_plan_yaml,
}


def write_plan(plan: Plan, path: Union[str, Path], fmt: Optional[str] = None) -> Path:
    """
    Write a plan file, creating parent directories.

    ``fmt`` follows load_plan(): picked from the suffix when omitted.
    """
    path = Path(path).expanduser()
    fmt = fmt or ("yaml" if path.suffix.lower() in YAML_SUFFIXES else "json")
    if fmt not in ENCODERS:
        raise ValueError(f"Unknown plan format '{fmt}'. Choose one of {sorted(ENCODERS)}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(ENCODERS[fmt](plan), encoding="utf-8")
    logger.debug("wrote %s plan to %s", fmt, path)
    return path
