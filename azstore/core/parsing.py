"""
Response decoding helpers.

Two decoding paths are supported:

- header decoding, where entity fields are read off named HTTP headers
  (``header_must`` / ``header_optional`` plus the ``parse_*`` converters);
- XML body decoding, where a parsed element tree is navigated by a fixed
  sequence of child element names (``traverse`` / ``cast_must`` /
  ``cast_optional``).

Every helper fails immediately with an ``AzureError`` subclass; no partial
entity is ever produced.
"""

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Type, TypeVar

import httpx

from .errors import (
    BoolParseError,
    DateParseError,
    EnumParseError,
    IntParseError,
    MissingHeaderError,
    UnexpectedXMLError,
    Utf8ParseError,
)
from .headers import META_PREFIX

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


# ============================================================================
# Scalar converters
# ============================================================================


def parse_date(value: str) -> datetime:
    """
    Parse an RFC 2822 timestamp (e.g. ``Wed, 23 Oct 2024 10:00:00 GMT``).

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        DateParseError: If the value is malformed
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError) as e:
        raise DateParseError(value) from e
    if parsed is None:
        raise DateParseError(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_bool(value: str) -> bool:
    """Parse a strict ``true`` / ``false`` string."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise BoolParseError(value)


def parse_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise IntParseError(value) from e


def parse_enum(enum_type: Type[E], value: str) -> E:
    try:
        return enum_type(value)
    except ValueError as e:
        raise EnumParseError(value, enum_type.__name__) from e


def convert(value: str, target: Type[T]) -> T:
    """
    Coerce text content into ``target``.

    Supported targets are ``str``, ``int``, ``bool``, ``datetime`` and any
    ``Enum`` subclass.
    """
    if target is str:
        return value  # type: ignore[return-value]
    if target is bool:
        return parse_bool(value)  # type: ignore[return-value]
    if target is int:
        return parse_int(value)  # type: ignore[return-value]
    if target is datetime:
        return parse_date(value)  # type: ignore[return-value]
    if isinstance(target, type) and issubclass(target, Enum):
        return parse_enum(target, value)  # type: ignore[return-value]
    raise TypeError(f"Unsupported conversion target: {target!r}")


# ============================================================================
# Header decoding
# ============================================================================


def _as_headers(headers: Mapping[str, str]) -> httpx.Headers:
    # Header names are case-insensitive
    if isinstance(headers, httpx.Headers):
        return headers
    return httpx.Headers(dict(headers))


def header_optional(headers: Mapping[str, str], name: str) -> Optional[str]:
    return _as_headers(headers).get(name)


def header_must(headers: Mapping[str, str], name: str) -> str:
    """
    Read a header the response is documented to carry.

    Raises:
        MissingHeaderError: If the header is absent
    """
    value = _as_headers(headers).get(name)
    if value is None:
        raise MissingHeaderError(name)
    return value


def cast_header_must(headers: Mapping[str, str], name: str, target: Type[T]) -> T:
    return convert(header_must(headers, name), target)


def cast_header_optional(headers: Mapping[str, str], name: str, target: Type[T]) -> Optional[T]:
    value = header_optional(headers, name)
    if value is None:
        return None
    return convert(value, target)


def metadata_from_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Collect ``x-ms-meta-*`` headers, keyed by the name without the prefix."""
    metadata = {}
    for key, value in _as_headers(headers).items():
        if key.lower().startswith(META_PREFIX):
            metadata[key[len(META_PREFIX):]] = value
    return metadata


# ============================================================================
# XML decoding
# ============================================================================


def parse_xml(body: bytes) -> ET.Element:
    """
    Decode a response body into an element tree.

    Azure prefixes XML bodies with a UTF-8 byte order mark, which is dropped.

    Raises:
        Utf8ParseError: If the body is not UTF-8
        UnexpectedXMLError: If the body is not well-formed XML
    """
    try:
        text = body.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise Utf8ParseError(str(e)) from e
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        raise UnexpectedXMLError(f"Malformed XML body: {e}") from e


def traverse(elem: ET.Element, path: Sequence[str], ignore_empty_leaf: bool = False) -> List[ET.Element]:
    """
    Collect every element reachable from ``elem`` through ``path``.

    Args:
        elem: Element to start from
        path: Child element names, outermost first
        ignore_empty_leaf: Return an empty list instead of failing when
            nothing matches

    Raises:
        UnexpectedXMLError: If nothing matches and ``ignore_empty_leaf`` is False
    """
    nodes = [elem]
    for name in path:
        nodes = [child for node in nodes for child in node if child.tag == name]
        if not nodes:
            break
    if not nodes and not ignore_empty_leaf:
        raise UnexpectedXMLError(f"Element not found: {'/'.join(path)}")
    return nodes


def _single(elem: ET.Element, path: Sequence[str], ignore_empty_leaf: bool) -> Optional[ET.Element]:
    nodes = traverse(elem, path, ignore_empty_leaf)
    if not nodes:
        return None
    if len(nodes) > 1:
        raise UnexpectedXMLError(f"Expected a single element at {'/'.join(path)}, found {len(nodes)}")
    return nodes[0]


def inner_text(node: ET.Element) -> Optional[str]:
    """Return the character data of a leaf element (``None`` when empty)."""
    if len(node) > 0:
        raise UnexpectedXMLError(f"Element {node.tag} should contain text, not child elements")
    return node.text or None


def cast_must(elem: ET.Element, path: Sequence[str], target: Type[T]) -> T:
    """
    Read and convert a leaf that must be present and non-empty.

    Raises:
        UnexpectedXMLError: If the element is missing or empty
        ParsingError: If the text cannot be converted to ``target``
    """
    node = _single(elem, path, ignore_empty_leaf=False)
    assert node is not None
    text = inner_text(node)
    if text is None:
        raise UnexpectedXMLError(f"Element {'/'.join(path)} should not be empty")
    return convert(text, target)


def cast_optional(elem: ET.Element, path: Sequence[str], target: Type[T]) -> Optional[T]:
    """Like ``cast_must`` but an absent or empty element yields ``None``."""
    node = _single(elem, path, ignore_empty_leaf=True)
    if node is None:
        return None
    text = inner_text(node)
    if text is None:
        return None
    return convert(text, target)


def metadata_from_element(elem: ET.Element) -> Dict[str, str]:
    """
    Decode the ``Metadata`` child of ``elem``.

    Each child element becomes one entry mapping its tag to its text. A missing
    ``Metadata`` node yields an empty mapping.

    Raises:
        UnexpectedXMLError: If a metadata entry is empty or not plain text
    """
    metadata: Dict[str, str] = {}
    for node in traverse(elem, ["Metadata"], ignore_empty_leaf=True):
        if node.text and node.text.strip():
            raise UnexpectedXMLError("Metadata should contain an ElementNode")
        for entry in node:
            if len(entry) > 0:
                raise UnexpectedXMLError(
                    "Metadata node should contain a CharacterNode with metadata value"
                )
            if not entry.text:
                raise UnexpectedXMLError("Metadata node should not be empty")
            metadata[entry.tag] = entry.text
    return metadata
