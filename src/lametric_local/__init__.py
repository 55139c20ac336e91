"""lametric-local package."""

from typing import Any

__all__ = ["LaMetricLocal", "__version__"]
__version__ = "1.0.0"


def __getattr__(name: str) -> Any:
    if name == "LaMetricLocal":
        from .client import LaMetricLocal

        return LaMetricLocal
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
