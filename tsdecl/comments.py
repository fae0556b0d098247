"""Documentation comments: collecting them from attributes and rendering them."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def extract_doc_comments(attributes: Iterable) -> list[str]:
    """Return the text of every ``doc`` attribute, in order.

    An attribute is anything with a ``path`` string (``::``-separated) and a
    ``value`` holding the comment text, or ``None``.
    """
    return [
        attribute.value
        for attribute in attributes
        if "doc" in attribute.path.split("::") and attribute.value is not None
    ]


def format_doc_comments(comments: Sequence[str]) -> str:
    """Render comment lines as a TypeScript ``/** ... */`` block, or ``""``."""
    if not comments:
        return ""
    body = "".join(f" *{line}\n" for line in comments)
    return f"/**\n{body} */\n"