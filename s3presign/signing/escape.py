"""
Percent-Encoding Primitives

RFC 3986 unreserved-character encoding as S3 expects it:
- ASCII letters, digits and ``- _ . ~`` pass through
- every other byte becomes ``%XX`` with uppercase hex
- text is encoded to UTF-8 first, so multi-byte characters are escaped
  byte by byte
- a space is ``%20``, never ``+``

``escape_object_key`` additionally leaves ``/`` alone, since object keys are
hierarchical paths.

Both functions map ``None`` to ``None`` so optional query parameters can be
passed straight through.

Complexity: O(n) in the length of the input.
"""

from __future__ import annotations

from typing import Optional, Union, overload
from urllib.parse import quote

StrOrBytes = Union[str, bytes]


@overload
def escape_component(value: StrOrBytes) -> str: ...
@overload
def escape_component(value: None) -> None: ...


def escape_component(value: Optional[StrOrBytes]) -> Optional[str]:
    """Escape everything except unreserved characters."""
    if value is None:
        return None
    return quote(value, safe="")


@overload
def escape_object_key(value: StrOrBytes) -> str: ...
@overload
def escape_object_key(value: None) -> None: ...


def escape_object_key(value: Optional[StrOrBytes]) -> Optional[str]:
    """Escape like escape_component but keep ``/`` unescaped."""
    if value is None:
        return None
    return quote(value, safe="/")
