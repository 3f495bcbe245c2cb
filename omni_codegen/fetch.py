from __future__ import annotations

"""
Blocking HTTP GET for remote ABI documents.

- Uses httpx; redirects are followed.
- The body is returned as text whatever the status code, callers decide
  whether a 404 page is a usable ABI.
- Transport failures are raised as FetchError; no retries are attempted.

Not defined on sandboxed interpreters without sockets (emscripten/wasi).

Example:
    from omni_codegen.fetch import http_get
    abi_json = http_get("https://example.org/abi/Counter.json")
"""

import logging
import sys
from typing import Mapping, Optional

import httpx

from .errors import FetchError
from .version import __version__

log = logging.getLogger(__name__)

NETWORK_AVAILABLE = sys.platform not in ("emscripten", "wasi")

__all__ = ["NETWORK_AVAILABLE"]


if NETWORK_AVAILABLE:

    def http_get(
        url: str,
        *,
        timeout: Optional[float] = 30.0,
        headers: Optional[Mapping[str, str]] = None,
        client: Optional[httpx.Client] = None,
    ) -> str:
        """
        Perform a blocking GET request and return the response body as text.

        `timeout` applies to the request whether or not a `client` is given;
        None disables it.
        """
        merged_headers = {"User-Agent": f"omni-codegen/{__version__}"}
        if headers:
            merged_headers.update(dict(headers))
        log.debug("fetching %s", url)
        try:
            if client is not None:
                r = client.get(url, headers=merged_headers, timeout=timeout, follow_redirects=True)
                return r.text
            with httpx.Client(timeout=timeout, headers=merged_headers, follow_redirects=True) as c:
                return c.get(url).text
        except httpx.HTTPError as e:
            raise FetchError(url=url, message=str(e) or type(e).__name__) from e
        except httpx.InvalidURL as e:
            raise FetchError(url=url, message=str(e)) from e

    __all__.append("http_get")
