"""
Pocket Network signing SDK (Python)
Convenience exports for the most common client APIs.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import SDKConfig  # noqa: F401
from .errors import (  # noqa: F401
    PoktSdkError,
    ConfigurationError,
    TxValidationError,
    EncodingError,
    DerivationError,
    ProviderError,
)

# Keys & addresses
from .address import (  # noqa: F401
    public_key_from_private,
    public_key_from_private_hex,
    address_from_public_key,
    get_address_from_public_key,
    validate_address,
)
from .utils.canonical import canonicalize, stringify_object_with_sort  # noqa: F401

# Wallet
from .wallet.signer import AbstractSigner, KeyManager  # noqa: F401

# Provider
from .provider import AbstractProvider, JsonRpcProvider  # noqa: F401

# Tx
from .tx import (  # noqa: F401
    DEFAULT_BASE_FEE,
    CoinDenom,
    DAOAction,
    FeatureActivation,
    GovParameter,
    RawTxRequest,
    TransactionBuilder,
    TransactionResponse,
    TxEncoderFactory,
)

__all__ = [
    "__version__",
    # Core
    "SDKConfig",
    "PoktSdkError", "ConfigurationError", "TxValidationError",
    "EncodingError", "DerivationError", "ProviderError",
    # Keys
    "public_key_from_private", "public_key_from_private_hex",
    "address_from_public_key", "get_address_from_public_key", "validate_address",
    "canonicalize", "stringify_object_with_sort",
    # Wallet
    "AbstractSigner", "KeyManager",
    # Provider
    "AbstractProvider", "JsonRpcProvider",
    # Tx
    "DEFAULT_BASE_FEE", "CoinDenom", "DAOAction", "FeatureActivation", "GovParameter",
    "RawTxRequest", "TransactionBuilder", "TransactionResponse", "TxEncoderFactory",
]
