"""Markdown -> HTML rendering and printable document export.

``render`` is the whole pipeline: block scan, then the inline pass. It keeps
no state between calls and does no I/O.
"""

from __future__ import annotations

import html

from markvault.blocks import render_blocks
from markvault.inline import apply_inline_formatting

PRINT_STYLESHEET = """\
body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
  max-width: 800px;
  margin: 40px auto;
  padding: 20px;
  line-height: 1.6;
  color: #2e3338;
}
h1, h2, h3, h4, h5, h6 { margin-top: 24px; margin-bottom: 16px; color: #2e3338; }
ul, ol { margin: 16px 0; padding-left: 24px; }
li { margin: 4px 0; }
code { background: #f3f4f6; padding: 2px 6px; border-radius: 3px; font-family: 'JetBrains Mono', 'Fira Code', monospace; }
pre { background: #f8f9fa; padding: 16px; border-radius: 6px; overflow: auto; border: 1px solid #e3e8ef; }
blockquote { border-left: 4px solid #7c3aed; margin: 16px 0; padding: 0 16px; color: #6b7280; }
strong { color: #2e3338; }
"""

_DOCUMENT_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
{stylesheet}</style>
</head>
<body>
{body}</body>
</html>
"""


def render(markdown: str, *, unterminated_fence: str = "flush") -> str:
    """Convert markdown source to an HTML fragment."""
    blocks = render_blocks(markdown.split("\n"), unterminated_fence=unterminated_fence)
    return apply_inline_formatting(blocks)


def render_document(
    markdown: str,
    title: str,
    *,
    stylesheet: str | None = None,
    unterminated_fence: str = "flush",
) -> str:
    """Wrap rendered markdown in a standalone HTML page suitable for printing.

    The title is escaped; the body is the trusted output of :func:`render`.
    """
    css = PRINT_STYLESHEET if stylesheet is None else stylesheet
    if css and not css.endswith("\n"):
        css += "\n"
    return _DOCUMENT_TEMPLATE.format(
        title=html.escape(title),
        stylesheet=css,
        body=render(markdown, unterminated_fence=unterminated_fence),
    )
