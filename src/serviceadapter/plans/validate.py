# serviceadapter/plans/validate.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from serviceadapter.errors import ValidationFailure
from serviceadapter.plans.types import InstanceGroup, Job, Plan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    """
    One structural defect found in a plan.

    The locator is the group/job position (and name, when it has one)
    plus the offending field.
    """

    field: str
    message: str
    group_index: Optional[int] = None
    group_name: Optional[str] = None
    job_index: Optional[int] = None
    job_name: Optional[str] = None

    @property
    def path(self) -> str:
        parts = []
        if self.group_index is not None:
            parts.append(f"instance_groups[{self.group_index}]")
        if self.job_index is not None:
            parts.append(f"jobs[{self.job_index}]")
        parts.append(self.field)
        return ".".join(parts)

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def _blank(value) -> bool:
    return not isinstance(value, str) or not value


def _check_job(job: Job, group_index: int, group_name: str, job_index: int) -> List[Violation]:
    found: List[Violation] = []

    def add(field: str, message: str) -> None:
        found.append(
            Violation(
                field=field,
                message=message,
                group_index=group_index,
                group_name=group_name or None,
                job_index=job_index,
                job_name=job.name or None,
            )
        )

    if _blank(job.name):
        add("name", "job name must not be empty")
    if _blank(job.release):
        add("release", "job release must not be empty")
    if job.properties is None:
        add("properties", "job properties must be defined (use {} for none)")
    return found


def _check_instance_group(group: InstanceGroup, index: int) -> List[Violation]:
    found: List[Violation] = []
    name = group.name if isinstance(group.name, str) else ""

    def add(field: str, message: str) -> None:
        found.append(Violation(field=field, message=message, group_index=index, group_name=name or None))

    if _blank(group.name):
        add("name", "instance group name must not be empty")
    if _blank(group.vm_type):
        add("vm_type", "vm_type must not be empty")
    if not group.networks:
        add("networks", "at least one network is required")

    instances = group.instances
    if isinstance(instances, bool) or not isinstance(instances, int):
        add("instances", f"instances must be an integer, got {instances!r}")
    elif instances < 1:
        add("instances", f"instances must be at least 1, got {instances}")

    for job_index, job in enumerate(group.jobs or []):
        found.extend(_check_job(job, index, name, job_index))
    return found


def validate_plan(plan: Plan) -> List[Violation]:
    """
    Collect every structural defect in ``plan``.

    Walks groups in order, then the field checks of each group, then its
    jobs in order. An empty list means the plan is valid. Never raises and
    never mutates the plan.
    """
    if not plan.instance_groups:
        violations = [Violation(field="instance_groups", message="plan must have at least one instance group")]
    else:
        violations = []
        for index, group in enumerate(plan.instance_groups):
            violations.extend(_check_instance_group(group, index))

    logger.debug("plan validation found %d violation(s)", len(violations))
    return violations


def check_plan(plan: Plan) -> Plan:
    """Raise ValidationFailure with every violation; return the plan when valid."""
    violations = validate_plan(plan)
    if violations:
        raise ValidationFailure(violations)
    return plan
