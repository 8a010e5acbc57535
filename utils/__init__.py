"""Utility package shared by the pricing models and services.

Submodules are exposed lazily so that importing ``utils`` does not configure
logging or read configuration as a side effect.
"""

from importlib import import_module
from types import ModuleType
from typing import Any

__all__ = [
    "decorators",
    "exceptions",
    "math",
    "system",
    "validation",
]


def __getattr__(name: str) -> ModuleType | Any:  # pragma: no cover - passthrough
    """Dynamically import submodules on first access."""
    if name in __all__:
        return import_module(f"{__name__}.{name}")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
