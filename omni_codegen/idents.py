"""
omni_codegen.idents
===================

Name handling for generated Python client modules.

ABI names come from arbitrary toolchains (Solidity camelCase, Vyper
snake_case, empty parameter names, names that shadow keywords). The helpers
here turn them into safe Python identifiers:

    to_identifier("", 0)            -> "p0"
    to_identifier("CamelCase1")     -> "camel_case_1"
    to_identifier("HTTPServer")     -> "http_server"
    to_identifier("self")           -> "self_"
    to_identifier("class")          -> "class_"

Plus a few rendering helpers used by the emitters (`expand_doc`,
`expand_bases`) and `preserve_underscore_delim` for aliased names.
"""

from __future__ import annotations

import keyword
from typing import Iterable, List

__all__ = [
    "RESERVED",
    "ident",
    "is_reserved",
    "safe_ident",
    "snake_case",
    "to_identifier",
    "preserve_underscore_delim",
    "expand_doc",
    "expand_bases",
]

# Keywords plus the receiver names every generated method/classmethod uses.
RESERVED = frozenset(keyword.kwlist) | {"self", "cls"}


def _is_word_char(ch: str) -> bool:
    return ch != "_" and ("_" + ch).isidentifier()


def _split_words(name: str) -> List[str]:
    words: List[str] = []
    cur: List[str] = []
    for i, ch in enumerate(name):
        if not _is_word_char(ch):
            if cur:
                words.append("".join(cur))
                cur = []
            continue
        if cur:
            prev = cur[-1]
            nxt = name[i + 1] if i + 1 < len(name) else ""
            boundary = (
                (ch.isupper() and (prev.islower() or prev.isdigit()))
                # acronym followed by a word: "HTTPServer" -> HTTP | Server
                or (ch.isupper() and prev.isupper() and nxt.islower())
                or (ch.isdigit() and not prev.isdigit())
            )
            if boundary:
                words.append("".join(cur))
                cur = []
        cur.append(ch)
    if cur:
        words.append("".join(cur))
    return words


def snake_case(name: str) -> str:
    """Convert camelCase / PascalCase / delimited names to snake_case.

    Returns "" when `name` holds no word characters.
    """
    return "_".join(w.lower() for w in _split_words(name))


def is_reserved(name: str) -> bool:
    return name in RESERVED


def ident(name: str) -> str:
    """Return `name` unchanged if it is a valid Python identifier."""
    if not name.isidentifier():
        raise ValueError(f"not a valid identifier: {name!r}")
    return name


def safe_ident(name: str) -> str:
    """
    Return `name` as an identifier, appending `_` if it is reserved.

    Raises ValueError if the result is still not a valid identifier.
    """
    if is_reserved(name):
        return ident(f"{name}_")
    return ident(name)


def to_identifier(name: str, index: int = 0) -> str:
    """
    Expand a (possibly empty) positional name into a safe snake_case identifier.

    Empty names, and names without any word characters, become `p{index}`.
    Never raises.
    """
    snake = snake_case(name) if name else ""
    if not snake:
        snake = f"p{index}"
    # digits, combining marks and U+00B7 may continue but not start a name
    if not snake[0].isidentifier():
        snake = "_" + snake
    return safe_ident(snake)


def preserve_underscore_delim(ident: str, alias: str) -> str:
    """
    Reapply the leading and trailing underscore runs of `alias` around `ident`.

    Example: ident="pascalCase", alias="__pascalcase__" -> "__pascalCase__"
    """
    lead = len(alias) - len(alias.lstrip("_"))
    trail = len(alias) - len(alias.rstrip("_"))
    return "_" * lead + ident + "_" * trail


def expand_doc(text: str) -> str:
    """Render `text` as a triple-quoted docstring literal."""
    body = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"""{body}"""'


def expand_bases(bases: Iterable[str]) -> str:
    """Render a class base list, e.g. ``("omni_contracts.BaseContract",)``."""
    out: List[str] = []
    for base in bases:
        if not base or not all(part.isidentifier() for part in base.split(".")):
            raise ValueError(f"invalid base class path: {base!r}")
        out.append(base)
    return ", ".join(out)
