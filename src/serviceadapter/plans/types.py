# serviceadapter/plans/types.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Free-form configuration bag. Values are bool, number, string, list or
# nested mappings of the same.
Properties = Dict[str, Any]


@dataclass
class Job:
    """
    A software component deployed onto an instance group, tied to a release.

    ``properties`` is required: ``None`` means "not defined" and fails
    validation, while ``{}`` is a defined but empty bag.
    """

    name: str
    release: str
    properties: Optional[Properties] = None


@dataclass
class InstanceGroup:
    """
    A named set of homogeneous machine instances plus the jobs running on them.

    Invariants (checked by serviceadapter.plans.validate, never here):
    - name, vm_type non-empty
    - networks non-empty
    - instances >= 1
    - every job valid
    """

    # Required fields (NO defaults)
    name: str
    vm_type: str
    networks: List[str]
    instances: int

    # Optional fields, omitted from serialization when empty
    persistent_disk_type: Optional[str] = None
    azs: List[str] = field(default_factory=list)
    lifecycle: Optional[str] = None
    jobs: List[Job] = field(default_factory=list)


@dataclass
class Plan:
    """
    Top-level deployment descriptor handed to the provisioning system.
    """

    instance_groups: List[InstanceGroup] = field(default_factory=list)
    properties: Optional[Properties] = field(default_factory=dict)

    def validate(self) -> "Plan":
        """Raise ValidationFailure listing every defect; return self when valid."""
        from serviceadapter.plans.validate import check_plan

        return check_plan(self)
