"""
Typed error classes for the Pocket signing SDK.

Raised by the message model, the encoders, the derivation helpers, the
transaction builder and the JSON-RPC provider so callers can catch specific
failure modes while still being able to catch the base `PoktSdkError`.

Families
--------
- ConfigurationError : bad builder/provider wiring (fail at construction)
- TxValidationError  : bad message fields (fail before any signing)
- EncodingError      : message cannot be rendered under the active scheme
- DerivationError    : malformed key material
- ProviderError      : transport / node rejection

Errors raised by an external signer or a caller-supplied provider are never
wrapped; they reach the caller unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

__all__ = [
    "PoktSdkError",
    # configuration
    "ConfigurationError",
    "NoSignerError",
    "NoProviderError",
    "InvalidChainIDError",
    # validation
    "TxValidationError",
    "MissingFieldError",
    "InvalidAmountError",
    "InvalidFieldError",
    "MissingMessageError",
    # encoding
    "EncodingError",
    "UnsupportedMessageError",
    "MalformedValueError",
    # derivation
    "DerivationError",
    "InvalidKeyLengthError",
    "InvalidKeyError",
    # provider
    "ProviderError",
    "RpcError",
    "RelayTimeoutError",
    "TransactionRejectedError",
]


class PoktSdkError(Exception):
    """Base class for all SDK errors."""


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------


class ConfigurationError(PoktSdkError):
    """Builder or provider was wired with missing or unsupported settings."""


class NoSignerError(ConfigurationError):
    pass


class NoProviderError(ConfigurationError):
    pass


@dataclass(slots=True, eq=False)
class InvalidChainIDError(ConfigurationError):
    chain_id: Any
    supported: tuple = ()

    def __str__(self) -> str:
        allowed = ", ".join(repr(c) for c in self.supported)
        return f"Invalid ChainID {self.chain_id!r}. Must be one of: {allowed}"


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


class TxValidationError(PoktSdkError):
    """A message or its envelope parameters are not acceptable."""


@dataclass(slots=True, eq=False)
class MissingFieldError(TxValidationError):
    field: str
    msg_type: Optional[str] = None

    def __str__(self) -> str:
        where = f" [{self.msg_type}]" if self.msg_type else ""
        return f"MissingFieldError{where}: {self.field} cannot be empty"


@dataclass(slots=True, eq=False)
class InvalidAmountError(TxValidationError):
    field: str
    value: Any
    msg_type: Optional[str] = None

    def __str__(self) -> str:
        where = f" [{self.msg_type}]" if self.msg_type else ""
        return (
            f"InvalidAmountError{where}: {self.field}={self.value!r} "
            "must be a positive base-10 integer string"
        )


@dataclass(slots=True, eq=False)
class InvalidFieldError(TxValidationError):
    field: str
    reason: str
    msg_type: Optional[str] = None

    def __str__(self) -> str:
        where = f" [{self.msg_type}]" if self.msg_type else ""
        return f"InvalidFieldError{where}: {self.field}: {self.reason}"


class MissingMessageError(TxValidationError):
    pass


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------


class EncodingError(PoktSdkError):
    """The sign document or the final transaction could not be produced."""


@dataclass(slots=True, eq=False)
class UnsupportedMessageError(EncodingError):
    msg_type: str
    scheme: str
    reason: str = "message not recognized by the active encoding scheme"

    def __str__(self) -> str:
        return f"UnsupportedMessageError [{self.scheme}] {self.msg_type}: {self.reason}"


class MalformedValueError(EncodingError, ValueError):
    """Raised when a value cannot be rendered as canonical JSON or protobuf."""


# -----------------------------------------------------------------------------
# Derivation
# -----------------------------------------------------------------------------


class DerivationError(PoktSdkError):
    """Key material could not be turned into a public key or address."""


@dataclass(slots=True, eq=False)
class InvalidKeyLengthError(DerivationError):
    what: str
    expected: int
    got: int

    def __str__(self) -> str:
        return f"InvalidKeyLengthError: {self.what} must be {self.expected} bytes, got {self.got}"


class InvalidKeyError(DerivationError):
    pass


# -----------------------------------------------------------------------------
# Provider
# -----------------------------------------------------------------------------


class ProviderError(PoktSdkError):
    """Base class for failures reported by `JsonRpcProvider`."""


@dataclass(slots=True, eq=False)
class RpcError(ProviderError):
    """The node answered with an unexpected status or payload."""

    route: str
    message: str
    http_status: Optional[int] = None
    data: Optional[Any] = None

    def __str__(self) -> str:
        parts = [f"RPC[{self.route}] {self.message}"]
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)


class RelayTimeoutError(ProviderError):
    pass


@dataclass(slots=True, eq=False)
class TransactionRejectedError(ProviderError):
    """
    Raised when the node refuses a raw transaction.

    Fields:
      - message: human-readable description
      - code: node error code (if available)
      - response: full decoded response body
    """

    message: str
    code: Optional[int] = None
    response: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        code = f" code={self.code}" if self.code is not None else ""
        return f"TransactionRejectedError{code}: {self.message}"
