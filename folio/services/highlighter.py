"""Pattern-based syntax highlighting for fenced code blocks.

Each language maps to an ordered tuple of :class:`Rule` objects. Rules run
one after another over the HTML-escaped code. Most rules only see the text
that earlier rules left outside of ``<span>`` elements, so they can never
rewrite markup inserted before them. String and comment rules are the
exception: they match across the whole text and keep any earlier spans nested
inside their own, as long as the match neither starts nor ends inside an
existing span. A keyword inside a string therefore stays a keyword within a
string span instead of splitting the string in two.
"""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class Rule:
    category: str
    pattern: re.Pattern
    replacement: str
    encloses_spans: bool = False

    def apply(self, code: str) -> str:
        return self.pattern.sub(self.replacement, code)


def _rule(
    category: str, pattern: str, replacement: str, flags: int = 0, encloses_spans: bool = False
) -> Rule:
    return Rule(category, re.compile(pattern, flags), replacement, encloses_spans)


def _wrap(category: str, group: str = r"\1") -> str:
    return f'<span class="{category}">{group}</span>'


# An escaped quote, then anything up to the same escaped quote. The other
# quote character may appear inside, as in "it's".
_QUOTED = r"(&#x27;|&quot;)((?:(?!\1)[\s\S])*?)\1"
_STRING = _rule("string", _QUOTED, _wrap("string", r"\1\2\1"), encloses_spans=True)
_NUMBER = _rule("number", r"\b(\d+\.?\d*)\b", _wrap("number"))
_BLOCK_COMMENT = _rule("comment", r"/\*[\s\S]*?\*/", _wrap("comment", r"\g<0>"), encloses_spans=True)

JAVASCRIPT_RULES: Tuple[Rule, ...] = (
    _rule(
        "keyword",
        r"\b(const|let|var|function|return|if|else|for|while|do|break|continue|switch|case|default"
        r"|try|catch|finally|throw|new|this|class|extends|import|export|from|as|async|await|yield"
        r"|typeof|instanceof)\b",
        _wrap("keyword"),
    ),
    _rule("literal", r"\b(true|false|null|undefined|NaN|Infinity)\b", _wrap("literal")),
    _NUMBER,
    _STRING,
    _rule("comment", r"//.*$", _wrap("comment", r"\g<0>"), re.MULTILINE, encloses_spans=True),
    _BLOCK_COMMENT,
    _rule(
        "builtin",
        r"\b(console|document|window|Array|Object|String|Number|Boolean|Date|Math|JSON|Promise"
        r"|setTimeout|setInterval|clearTimeout|clearInterval)\b",
        _wrap("builtin"),
    ),
)

TYPESCRIPT_RULES: Tuple[Rule, ...] = JAVASCRIPT_RULES + (
    _rule(
        "keyword",
        r"\b(interface|type|enum|namespace|declare|abstract|implements|private|public|protected"
        r"|readonly|static)\b",
        _wrap("keyword"),
    ),
)

JSX_RULES: Tuple[Rule, ...] = JAVASCRIPT_RULES + (
    _rule("jsx-tag", r"(&lt;/?)([A-Z][A-Za-z0-9]*)", r"\1" + _wrap("jsx-tag", r"\2")),
    _rule("jsx-attr", r"\b([a-z]+)=", _wrap("jsx-attr") + "="),
)

PYTHON_RULES: Tuple[Rule, ...] = (
    _rule(
        "keyword",
        r"\b(def|class|if|elif|else|for|while|try|except|finally|with|as|import|from|return|yield"
        r"|break|continue|pass|raise|assert|global|nonlocal|lambda|and|or|not|in|is)\b",
        _wrap("keyword"),
    ),
    _rule("literal", r"\b(True|False|None)\b", _wrap("literal")),
    _NUMBER,
    _STRING,
    _rule("comment", r"(?<!&)#.*$", _wrap("comment", r"\g<0>"), re.MULTILINE, encloses_spans=True),
    _rule(
        "builtin",
        r"\b(print|len|range|enumerate|zip|map|filter|sorted|sum|max|min|abs|round|int|float|str"
        r"|list|dict|set|tuple)\b",
        _wrap("builtin"),
    ),
)

CSS_RULES: Tuple[Rule, ...] = (
    _rule("selector", r"([.#]?[a-zA-Z-]+)\s*{", _wrap("selector") + " {"),
    _rule("property", r"([a-zA-Z-]+):", _wrap("property") + ":"),
    _rule("value", r":\s*([^;]+);", ": " + _wrap("value") + ";"),
    _BLOCK_COMMENT,
)

HTML_RULES: Tuple[Rule, ...] = (
    _rule("tag", r"(&lt;/?)([a-zA-Z][a-zA-Z0-9]*)", r"\1" + _wrap("tag", r"\2")),
    _rule("attr", r"([a-zA-Z-]+)=", _wrap("attr") + "="),
    _STRING,
)

JSON_RULES: Tuple[Rule, ...] = (
    _rule("key", _QUOTED + ":", _wrap("key", r"\1\2\1") + ":"),
    _rule("string", r":\s*" + _QUOTED, ": " + _wrap("string", r"\1\2\1")),
    _rule("number", r":\s*(\d+\.?\d*)", ": " + _wrap("number")),
    _rule("literal", r":\s*(true|false|null)", ": " + _wrap("literal")),
)

LANGUAGE_RULES: Dict[str, Tuple[Rule, ...]] = {
    "javascript": JAVASCRIPT_RULES,
    "typescript": TYPESCRIPT_RULES,
    "jsx": JSX_RULES,
    "python": PYTHON_RULES,
    "css": CSS_RULES,
    "html": HTML_RULES,
    "json": JSON_RULES,
}

LANGUAGE_ALIASES: Dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "tsx": "jsx",
    "py": "python",
}

_SPAN_TAG = re.compile(r'<span class="[\w-]+">|</span>')

Range = Tuple[int, int]


def rules_for(language: str) -> Tuple[Rule, ...]:
    name = language.lower()
    return LANGUAGE_RULES.get(LANGUAGE_ALIASES.get(name, name), ())


def span_ranges(code: str) -> List[Range]:
    """``(start, end)`` offsets of the outermost spans in ``code``."""
    ranges: List[Range] = []
    depth = 0
    start = 0
    for tag in _SPAN_TAG.finditer(code):
        if tag.group(0) == "</span>":
            depth -= 1
            if depth == 0:
                ranges.append((start, tag.end()))
        else:
            if depth == 0:
                start = tag.start()
            depth += 1
    return ranges


def apply_outside_spans(rule: Rule, code: str) -> str:
    """Run ``rule`` over the stretches of ``code`` not already inside a span."""
    parts = []
    position = 0
    for start, end in span_ranges(code):
        parts.append(rule.apply(code[position:start]))
        parts.append(code[start:end])
        position = end
    parts.append(rule.apply(code[position:]))
    return "".join(parts)


def apply_around_spans(rule: Rule, code: str) -> str:
    """Run ``rule`` over all of ``code``, letting matches enclose whole spans.

    A match that starts inside a span, or ends part way through one, is
    rejected and the search resumes past it.
    """
    ranges = span_ranges(code)
    parts = []
    position = search_from = 0
    while True:
        match = rule.pattern.search(code, search_from)
        if match is None:
            break
        containing = _range_containing(ranges, match.start())
        if containing is not None:
            search_from = containing[1]
            continue
        if _range_containing(ranges, match.end(), strict=True) is not None or match.end() == match.start():
            search_from = match.start() + 1
            continue
        parts.append(code[position:match.start()])
        parts.append(match.expand(rule.replacement))
        position = search_from = match.end()
    parts.append(code[position:])
    return "".join(parts)


def _range_containing(ranges: List[Range], offset: int, strict: bool = False) -> Optional[Range]:
    for start, end in ranges:
        if start < offset < end or (not strict and offset == start):
            return start, end
    return None


def highlight(code: str, language: str) -> str:
    """Escape ``code`` and wrap its lexical categories in classed spans.

    Unknown languages come back escaped with no spans.
    """
    highlighted = html.escape(code)
    for rule in rules_for(language):
        if rule.encloses_spans:
            highlighted = apply_around_spans(rule, highlighted)
        else:
            highlighted = apply_outside_spans(rule, highlighted)
    return highlighted
