from __future__ import annotations

from .base import AbstractProvider, V1RpcRoutes, extract_basic_auth
from .json_rpc import DEFAULT_TIMEOUT, JsonRpcProvider

__all__ = [
    "AbstractProvider",
    "V1RpcRoutes",
    "extract_basic_auth",
    "DEFAULT_TIMEOUT",
    "JsonRpcProvider",
]
