"""Text helpers for rich-text (HTML) document fields."""

import html
from typing import List


def escape_html(text: str) -> str:
    """Escape &, < and > for insertion into an HTML text node. Quotes are left alone."""
    return html.escape(text, quote=False)


def highlights_to_html(highlights: List[str], summary: str = "") -> str:
    """
    Merge a summary and a list of highlights into one rich-text block.

    The summary becomes a paragraph and the highlights a bullet list, in that
    order. Either part is omitted when empty.

    Args:
        highlights: Bullet point texts (plain text)
        summary: Lead paragraph text (plain text)

    Returns:
        HTML string, e.g. "<p>Led team</p><ul><li>Shipped X</li></ul>"

    Examples:
        >>> highlights_to_html(["Shipped X", "Cut costs 40%"], "Led team")
        '<p>Led team</p><ul><li>Shipped X</li><li>Cut costs 40%</li></ul>'
        >>> highlights_to_html([], "")
        ''
    """
    parts = []
    if summary:
        parts.append(f"<p>{escape_html(summary)}</p>")
    if highlights:
        items = "".join(f"<li>{escape_html(h)}</li>" for h in highlights)
        parts.append(f"<ul>{items}</ul>")
    return "".join(parts)
