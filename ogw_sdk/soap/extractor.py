"""
Correlation extraction from SOAP/XML and JSON response bodies.

Lookups return ``None`` when the field is absent so that callers can raise a
workflow-level error naming the missing field.
"""
from __future__ import annotations

import json
import re
from typing import Any

_NAMESPACE_PREFIX = r"(?:[A-Za-z_][\w.\-]*:)?"

FAULT_UNKNOWN = "Unknown"


def _element_pattern(name: str) -> re.Pattern[str]:
    local = re.escape(name)
    return re.compile(
        rf"<{_NAMESPACE_PREFIX}{local}(?:\s[^>]*)?>(.*?)</{_NAMESPACE_PREFIX}{local}\s*>",
        re.DOTALL,
    )


def extract_xml_field(text: str, name: str) -> str | None:
    """
    Return the trimmed text of the first element whose local name is ``name``.

    Namespace prefixes, attributes and surrounding whitespace are tolerated.
    A self-closing element yields an empty string.
    """
    if not text:
        return None
    match = _element_pattern(name).search(text)
    if match:
        return match.group(1).strip()
    empty = re.search(rf"<{_NAMESPACE_PREFIX}{re.escape(name)}(?:\s[^>]*)?/>", text)
    if empty:
        return ""
    return None


def _search_json(node: Any, name: str) -> Any:
    if isinstance(node, dict):
        if name in node:
            return node[name]
        for value in node.values():
            found = _search_json(value, name)
            if found is not None:
                return found
    elif isinstance(node, list):
        for item in node:
            found = _search_json(item, name)
            if found is not None:
                return found
    return None


def extract_json_field(text: str, name: str) -> str | None:
    """Depth-first search of a JSON body for ``name``; scalars are stringified."""
    try:
        document = json.loads(text)
    except (TypeError, ValueError):
        return None
    value = _search_json(document, name)
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def extract_field(text: str, name: str) -> str | None:
    """
    Extract ``name`` from a response body, trying JSON first for JSON-looking
    bodies and XML otherwise (XML/JSON hybrids fall through to XML).

    Returns:
        Trimmed value, or None when not found
    """
    if not text:
        return None
    stripped = text.lstrip()
    if stripped[:1] in ("{", "["):
        value = extract_json_field(stripped, name)
        if value is not None:
            return value
    return extract_xml_field(text, name)


def extract_fault(text: str) -> str | None:
    """
    Detect a SOAP fault.

    Returns:
        The fault message (``"Unknown"`` if the element is empty), or None
        when the body carries no ``faultstring`` element
    """
    if not text or "faultstring" not in text:
        return None
    message = extract_xml_field(text, "faultstring")
    if message is None:
        # marker present but element malformed
        if re.search(rf"<{_NAMESPACE_PREFIX}faultstring\b", text) is None:
            return None
        return FAULT_UNKNOWN
    return message or FAULT_UNKNOWN
