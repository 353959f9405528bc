"""
pokt_sdk.cli
============

Command-line interface for the Pocket signing SDK, exposed as the `pokt-sdk`
console script. Typer is only imported when the CLI is actually used.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, List

from ..version import __version__

__all__: List[str] = [
    "__version__",
    "main",
    "run",
    "app",
]

_SUBMODULE = "pokt_sdk.cli.main"
_EXPOSE = ("app", "main", "run")


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name in _EXPOSE:
        return getattr(import_module(_SUBMODULE), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
