"""
GeneratorContext: everything a binding emitter needs from this package.

Build one context per generator run and hand it to the emitters:

    ctx = GeneratorContext()                  # config from OMNI_CODEGEN_* env
    paths = ctx.resolve()                     # umbrella vs standalone imports
    base = paths.contract_ref("ContractClient")
    arg = ctx.to_identifier(param_name, i)
    addr = ctx.parse_address("0x...")
    abi_src = ctx.fetch("https://...")        # not on emscripten/wasi
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from . import fetch as _fetch
from .address import Address, parse_address
from .config import CodegenConfig
from .idents import to_identifier
from .namespaces import DependencyQuery, NamespacePaths, NamespaceResolver, Resolution


@dataclass
class GeneratorContext:
    config: CodegenConfig = field(default_factory=CodegenConfig.from_env)
    query: Optional[DependencyQuery] = None
    _resolver: NamespaceResolver = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._resolver = NamespaceResolver(self.config, self.query)

    def resolve(self) -> NamespacePaths:
        """Namespace paths for qualified references; computed on first call only."""
        return self._resolver.resolve()

    def resolution(self) -> Resolution:
        return self._resolver.resolution()

    def to_identifier(self, name: str, index: int = 0) -> str:
        return to_identifier(name, index)

    def parse_address(self, s: str) -> Address:
        return parse_address(s)

    if _fetch.NETWORK_AVAILABLE:

        def fetch(self, url: str) -> str:
            """Blocking GET of a remote document (e.g. an ABI JSON)."""
            return _fetch.http_get(
                url,
                timeout=self.config.fetch_timeout,
                headers={"User-Agent": self.config.user_agent},
            )


__all__ = ["GeneratorContext"]
