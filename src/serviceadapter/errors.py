from __future__ import annotations

from typing import List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from serviceadapter.plans.validate import Violation


class PlanError(Exception):
    """Base class for every error raised by serviceadapter."""


class MalformedInput(PlanError, ValueError):
    """
    Raised when plan text is not well-formed, or a field does not have
    its declared type.

    There is never a partial result: the caller fixes the input and retries.
    """

    def __init__(self, message: str, errors: Sequence[str] = ()):
        self.reason = message
        self.errors: List[str] = list(errors)
        if self.errors:
            message = message + ":\n" + "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(message)


class ValidationFailure(PlanError, ValueError):
    """
    Raised by check_plan() when a decoded plan misses required data.

    Carries every violation found, not only the first one. The plan itself
    is left untouched and can be corrected and re-checked.
    """

    def __init__(self, violations: Sequence["Violation"]):
        self.violations: List["Violation"] = list(violations)
        lines = "\n".join(f"  - {v}" for v in self.violations)
        super().__init__(f"Invalid plan ({len(self.violations)} violation(s)):\n{lines}")
