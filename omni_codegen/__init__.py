"""
Omni codegen support
Helpers shared by the contract binding generator: namespace resolution,
identifier sanitizing, address literals and remote ABI fetching.
"""

from .version import __version__  # noqa: F401

# Config & errors
from .config import CodegenConfig  # noqa: F401
from .errors import (  # noqa: F401
    CodegenError,
    AddressError,
    MissingPrefixError,
    InvalidEncodingError,
    FetchError,
    DependencyQueryError,
)

# Generator-facing surface
from .context import GeneratorContext  # noqa: F401
from .namespaces import NamespacePaths, NamespaceResolver  # noqa: F401
from .idents import to_identifier, preserve_underscore_delim  # noqa: F401
from .address import Address, parse_address  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "CodegenConfig",
    "CodegenError", "AddressError", "MissingPrefixError", "InvalidEncodingError",
    "FetchError", "DependencyQueryError",
    # Surface
    "GeneratorContext",
    "NamespacePaths", "NamespaceResolver",
    "to_identifier", "preserve_underscore_delim",
    "Address", "parse_address",
]
