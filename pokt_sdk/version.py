"""Package version (PEP 440); also sent in the RPC User-Agent."""

# Bump this when publishing
__version__ = "0.1.0"

__all__ = ["__version__"]
