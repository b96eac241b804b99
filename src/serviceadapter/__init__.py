from serviceadapter.errors import MalformedInput, PlanError, ValidationFailure
from serviceadapter.log import configure_logging
from serviceadapter.plans.types import InstanceGroup, Job, Plan, Properties
from serviceadapter.plans.load import decode_plan, decode_plan_yaml, load_plan, plan_from_dict
from serviceadapter.plans.emit import encode_plan, encode_plan_yaml, plan_to_dict, write_plan
from serviceadapter.plans.validate import Violation, check_plan, validate_plan

__all__ = [
    "InstanceGroup",
    "Job",
    "MalformedInput",
    "Plan",
    "PlanError",
    "Properties",
    "ValidationFailure",
    "Violation",
    "check_plan",
    "configure_logging",
    "decode_plan",
    "decode_plan_yaml",
    "encode_plan",
    "encode_plan_yaml",
    "load_plan",
    "plan_from_dict",
    "plan_to_dict",
    "validate_plan",
    "write_plan",
]
