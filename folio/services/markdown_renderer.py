from __future__ import annotations

from typing import Optional

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from folio.services.code_blocks import enhance_code_blocks
from folio.services.heading_ids import FallbackFactory, add_heading_ids


# Raw HTML passes through untouched: post sources are first-party content.
_markdown = (
    MarkdownIt("commonmark", {"html": True, "linkify": True})
    .enable("table")
    .enable("strikethrough")
    .enable("linkify")
)
_markdown.use(tasklists_plugin)


def render_markdown(body: str) -> str:
    return _markdown.render(body)


def render_content(
    body: str, heading_fallback: Optional[FallbackFactory] = None, ascii_heading_ids: bool = False
) -> str:
    """Markdown body to the final post HTML.

    Heading ids are assigned before code blocks are enhanced so the heading
    pass only ever sees renderer output.
    """
    content_html = render_markdown(body)
    content_html = add_heading_ids(content_html, fallback=heading_fallback, ascii_only=ascii_heading_ids)
    return enhance_code_blocks(content_html)
