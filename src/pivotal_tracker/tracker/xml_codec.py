"""XML request serialization and response parsing.

Responses are reduced to plain dicts and lists:

- The document root is dropped; its children form the result, along with
  its attributes (other than ``type``) where no child has the same name.
- Elements that are collections in the API (``error``, ``iteration``,
  ``label``, ``note``, ``story``) are always lists, even with one entry.
- ``<errors><error/>...</errors>`` and ``<labels><label/>...</labels>`` are
  collapsed to plain ``errors`` and ``labels`` lists.
- Leaf elements carrying ``type="integer"`` become ints; other attributes are
  dropped and empty elements become None.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

logger = logging.getLogger(__name__)

FORCE_LIST_TAGS = ("error", "iteration", "label", "note", "story")

# Container element -> repeated child element
GROUP_TAGS = {
    "errors": "error",
    "labels": "label",
}


class XMLParseError(ValueError):
    """Response body is not well-formed XML."""

    pass


def make_xml(root: str, data: dict[str, Any]) -> str:
    """Serialize a flat mapping to an XML document with a single root element.

    None values are skipped. List values are written as a container holding
    repeated singular children, e.g. ``labels=["a", "b"]`` becomes
    ``<labels><label>a</label><label>b</label></labels>``.

    Args:
        root: Name of the root element (e.g. "story")
        data: Field name to value mapping

    Returns:
        XML document as a string
    """
    body: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            child_tag = GROUP_TAGS.get(key, key.removesuffix("s"))
            body[key] = {child_tag: [_to_text(item) for item in value]}
        else:
            body[key] = _to_text(value)
    return xmltodict.unparse({root: body})


def parse_xml(content: str | bytes) -> dict[str, Any]:
    """Parse a response document into a normalized dict.

    Args:
        content: Raw XML response body

    Returns:
        Children and attributes of the document root, normalized as described
        in the module docstring. An empty dict if the root has neither.

    Raises:
        XMLParseError: If the content is not well-formed XML
    """
    try:
        document = xmltodict.parse(content, force_list=FORCE_LIST_TAGS)
    except ExpatError as e:
        raise XMLParseError(f"Malformed XML response: {e}") from e

    if not document:
        return {}

    # Drop the root element
    root_value = next(iter(document.values()))
    if isinstance(root_value, list):
        # A root named like a collection tag (e.g. <story>) is forced into a list too
        root_value = root_value[0]
    normalized = _normalize(root_value)
    if not isinstance(normalized, dict):
        normalized = {}

    # Root attributes (<response success="true">) are fields too; child elements win
    if isinstance(root_value, dict):
        for key, value in root_value.items():
            name = key[1:]
            if key.startswith("@") and name != "type" and name not in normalized:
                normalized[name] = value
    return normalized


def _to_text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _normalize(value: Any) -> Any:
    """Recursively reduce xmltodict output to plain values."""
    if isinstance(value, list):
        return [_normalize(item) for item in value]
    if not isinstance(value, dict):
        return value

    children = {k: v for k, v in value.items() if not k.startswith("@") and k != "#text"}
    if not children:
        return _convert_leaf(value.get("#text"), value.get("@type"))

    result: dict[str, Any] = {}
    for key, child in children.items():
        child = _normalize(child)
        if key in GROUP_TAGS:
            child = _ungroup(key, child)
        result[key] = child
    return result


def _convert_leaf(text: str | None, type_name: str | None) -> Any:
    if text is None:
        return None
    if type_name == "integer":
        try:
            return int(text)
        except ValueError:
            logger.debug("Non-integer value %r in integer element", text)
            return text
    return text


def _ungroup(key: str, value: Any) -> list[Any]:
    """Collapse a container element into the list of its repeated children."""
    if value is None:
        return []
    if isinstance(value, dict):
        items = value.get(GROUP_TAGS[key]) or []
        return items if isinstance(items, list) else [items]
    if isinstance(value, str):
        # Labels may also come back as one comma-separated string
        if key == "labels":
            return [part.strip() for part in value.split(",") if part.strip()]
        return [value]
    return list(value)
