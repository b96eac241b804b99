from . import types
from . import schema
from . import load
from . import emit
from . import validate

__all__ = [
    "types",
    "schema",
    "load",
    "emit",
    "validate",
]
