from __future__ import annotations

import html
import re

from folio.services.highlighter import highlight


FENCED_BLOCK_PATTERN = re.compile(r'<pre><code class="language-([^"\s]+)">([\s\S]*?)</code></pre>')
BARE_BLOCK_PATTERN = re.compile(r"<pre><code>([\s\S]*?)</code></pre>")
INLINE_CODE_PATTERN = re.compile(r'(?<!<pre class="code-block">)<code>([^<]+)</code>')

COPY_ICON = (
    '<svg width="16" height="16" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">\n'
    '              <rect x="9" y="9" width="13" height="13" rx="2" ry="2"></rect>\n'
    '              <path d="M5 15H4a2 2 0 0 1-2-2V4a2 2 0 0 1 2-2h9a2 2 0 0 1 2 2v1"></path>\n'
    "            </svg>"
)

CODE_BLOCK_TEMPLATE = """<div class="code-block-wrapper" data-language="{data_language}">
        <div class="code-block-header">
          <span class="code-block-language">{label}</span>
          <button class="copy-code-btn" data-code="{payload}" title="Copy code">
            {icon}
          </button>
        </div>
        <pre class="code-block"><code{code_class}>{body}</code></pre>
      </div>"""


def render_code_block(code: str, language: str | None = None) -> str:
    """Wrap raw (unescaped) ``code`` in the copyable, highlighted block markup.

    The ``data-code`` attribute carries ``code`` verbatim, escaped for use
    inside a double-quoted attribute; clients copy it to the clipboard.
    """
    if language:
        data_language = label = language
        code_class = f' class="language-{language}"'
        body = highlight(code, language)
    else:
        data_language, label, code_class = "text", "code", ""
        body = html.escape(code)

    return CODE_BLOCK_TEMPLATE.format(
        data_language=data_language,
        label=label,
        payload=html.escape(code),
        icon=COPY_ICON,
        code_class=code_class,
        body=body,
    )


def enhance_code_blocks(content: str) -> str:
    """Replace rendered fenced code blocks and tag inline code.

    Only the plain ``<pre><code>`` markup emitted by the markdown renderer is
    matched, so already enhanced HTML passes through unchanged.
    """
    if not content:
        return ""

    content = FENCED_BLOCK_PATTERN.sub(
        lambda match: render_code_block(html.unescape(match.group(2)), match.group(1)),
        content,
    )
    content = BARE_BLOCK_PATTERN.sub(
        lambda match: render_code_block(html.unescape(match.group(1))),
        content,
    )
    return INLINE_CODE_PATTERN.sub(r'<code class="inline-code">\1</code>', content)
