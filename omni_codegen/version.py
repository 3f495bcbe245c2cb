"""
Version of the omni-codegen support layer.

We keep a static __version__ (PEP 440); it is embedded in the default
User-Agent sent by the remote fetch helper.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.1.0"

__all__ = ["__version__"]
