"""Tests for the full markdown -> HTML pipeline and document export."""

from __future__ import annotations

from markvault.markup import PRINT_STYLESHEET, render, render_document
from tests.conftest import WELCOME_NOTE


class TestRender:
    def test_paragraph_with_emphasis(self) -> None:
        assert render("**bold** and *em*") == "<p><strong>bold</strong> and <em>em</em></p>\n"

    def test_ordered_list(self) -> None:
        assert render("1. alpha\n2. beta") == "<ol>\n<li>alpha</li>\n<li>beta</li>\n</ol>\n"

    def test_link_in_heading(self) -> None:
        result = render("# [Home](/)")
        assert result == '<h1><a href="/" target="_blank" rel="noopener noreferrer">Home</a></h1>\n'

    def test_task_list_example(self) -> None:
        result = render("- [x] done\n- [ ] todo")
        assert result.count('<ul class="task-list">') == 1
        assert '<input type="checkbox" checked data-line="0">' in result
        assert '<input type="checkbox" data-line="1">' in result

    def test_empty_source(self) -> None:
        assert render("") == "<br>\n"

    def test_inline_pass_reaches_fenced_code(self) -> None:
        result = render(WELCOME_NOTE)
        assert '<pre><code>print("<strong>not bold</strong>")</code></pre>' in result

    def test_unterminated_fence_policies(self) -> None:
        assert render("```\ncode") == "<pre><code>code</code></pre>\n"
        assert render("```\ncode", unterminated_fence="drop") == ""

    def test_welcome_note_structure(self) -> None:
        result = render(WELCOME_NOTE)
        assert result.startswith("<h1>Welcome</h1>\n<br>\n")
        assert "<p>This is a <strong>markdown</strong> note with <em>style</em>.</p>" in result
        assert "<h2>Tasks</h2>" in result
        assert 'data-line="5"' in result
        assert 'data-line="6"' in result


class TestRenderDocument:
    def test_wraps_fragment(self) -> None:
        page = render_document("# Hi", "Notes")
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>Notes</title>" in page
        assert "<body>\n<h1>Hi</h1>\n</body>" in page

    def test_title_is_escaped(self) -> None:
        page = render_document("x", "A & <B>")
        assert "<title>A &amp; &lt;B&gt;</title>" in page

    def test_default_print_stylesheet(self) -> None:
        page = render_document("x", "t")
        assert PRINT_STYLESHEET in page

    def test_custom_stylesheet(self) -> None:
        page = render_document("x", "t", stylesheet="body { color: red; }")
        assert "body { color: red; }\n</style>" in page
        assert "max-width: 800px" not in page
