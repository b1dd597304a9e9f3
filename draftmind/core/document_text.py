"""
Plain text extraction from stored rich-text documents.

The editor persists documents as a JSON node tree; retrieval works on the
concatenated leaf text.

Dependencies: json
System role: Document text adapter for the chunker
"""

import json
from typing import Any


def _extract_node_text(node: Any) -> str:
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return ""

    text = node.get("text")
    if isinstance(text, str):
        return text

    children = node.get("content")
    if isinstance(children, list):
        return " ".join(_extract_node_text(child) for child in children)

    return ""


def extract_plain_text(content: str | None) -> str:
    """
    Flatten stored document content into plain text.

    Args:
        content: Serialized editor document, or legacy plain text

    Returns:
        str: Leaf text joined with single spaces; non-JSON content verbatim
    """
    if not content:
        return ""
    try:
        parsed = json.loads(content)
    except (json.JSONDecodeError, TypeError):
        return content
    return _extract_node_text(parsed)
