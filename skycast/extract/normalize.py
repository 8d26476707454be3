"""Leaf-text normalizers. None of these raise; unusable input becomes None."""

import copy
import re
import logging

from bs4 import Tag

from skycast.errors import MalformedValueError

logger = logging.getLogger(__name__)

DEGREE = "°"
INTEGER = re.compile(r"[+-]?[0-9]+")


def leaf_text(node: Tag) -> str:
    """Plain text of a node, excluding every descendant element subtree.

    Works on a copy: child elements are removed from the copy and whatever
    direct text remains is read back. The source document is not touched.
    Used for cells such as ``<span><svg/>20%</span>`` where an icon sits
    beside the value.
    """
    clone = copy.copy(node)
    for child in clone.find_all(True, recursive=False):
        child.decompose()
    return clone.get_text().strip()


def node_text(node: Tag) -> str:
    return node.get_text(" ", strip=True)


def parse_temperature(text: str) -> int:
    """Parse ``"72°"`` style text. Raises MalformedValueError on anything else."""
    raw = text.strip().removesuffix(DEGREE).strip()
    # int() alone accepts "1_0" and non-ASCII digits
    if not INTEGER.fullmatch(raw):
        raise MalformedValueError(f"Not a temperature: {text!r}")
    return int(raw, 10)


def normalize_temperature(text: str | None) -> int | None:
    if text is None or not text.strip():
        return None
    try:
        return parse_temperature(text)
    except MalformedValueError as e:
        logger.debug("%s", e)
        return None


def normalize_label(text: str | None) -> str | None:
    if text is None:
        return None
    text = " ".join(text.split())
    return text or None


def normalize_percentage(text: str | None) -> str | None:
    if text is None:
        return None
    text = text.strip()
    return text or None
