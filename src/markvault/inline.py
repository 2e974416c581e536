"""Inline formatting pass over block-level HTML."""

from __future__ import annotations

import re

IMAGE_STYLE = "max-width: 100%; height: auto; border-radius: 8px;"

# Order matters: bold before italic so "**" is consumed first, and images
# before links so "![alt](src)" is not read as "!" plus a link.
_SUBSTITUTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    (re.compile(r"`([^`]+)`"), r"<code>\1</code>"),
    (re.compile(r"!\[([^\]]*)\]\(([^)]+)\)"), rf'<img alt="\1" src="\2" style="{IMAGE_STYLE}">'),
    (re.compile(r"\[([^\]]+)\]\(([^)]+)\)"), r'<a href="\2" target="_blank" rel="noopener noreferrer">\1</a>'),
]


def apply_inline_formatting(html: str) -> str:
    """Rewrite bold, italic, code spans, images and links across the whole string.

    Unmatched delimiters are left as literal text.
    """
    for pattern, replacement in _SUBSTITUTIONS:
        html = pattern.sub(replacement, html)
    return html
