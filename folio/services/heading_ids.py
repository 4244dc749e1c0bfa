from __future__ import annotations

import html
import re
import secrets
import string
from typing import Callable, List, Optional

from folio.models.post import Heading


HEADING_PATTERN = re.compile(r"<h([2-6])>(.*?)</h\1>")
TAGGED_HEADING_PATTERN = re.compile(r'<h([2-6]) id="([^"]*)">(.*?)</h\1>')
TAG_PATTERN = re.compile(r"<[^>]*>")

# Compatibility break: ids are derived from unescaped text with Unicode word
# characters, so "Über uns" gives `über-uns` and "Q&amp;A" gives `qa`. The
# earlier site used ASCII word characters on the escaped text (`ber-uns`,
# `qampa`). ``ascii_only`` reproduces those ids for existing inbound links.
_NON_WORD = re.compile(r"[^\w\s]")
_ASCII_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_TOKEN_ALPHABET = string.ascii_lowercase + string.digits

FallbackFactory = Callable[[int], str]


def plain_text(markup: str) -> str:
    return html.unescape(TAG_PATTERN.sub("", markup))


def slugify_heading(text: str, ascii_only: bool = False) -> str:
    """Turn heading text into an anchor id; empty when nothing usable is left."""
    non_word = _ASCII_NON_WORD if ascii_only else _NON_WORD
    slug = non_word.sub("", text.lower()).strip()
    slug = _WHITESPACE.sub("-", slug)
    first = slug[:1]
    if first and (first in string.digits if ascii_only else first.isdigit()):
        slug = f"heading-{slug}"
    return slug


def random_fallback(level: int) -> str:
    token = "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(9))
    return f"heading-{level}-{token}"


def counter_fallback() -> FallbackFactory:
    """Deterministic fallback: ``heading-<level>-<n>`` numbered per document."""
    count = 0

    def factory(level: int) -> str:
        nonlocal count
        count += 1
        return f"heading-{level}-{count}"

    return factory


def add_heading_ids(
    content: str, fallback: Optional[FallbackFactory] = None, ascii_only: bool = False
) -> str:
    """Inject an ``id`` into every bare ``<h2>``..``<h6>`` opening tag.

    Headings that already carry attributes are left alone, so running this
    twice over the same HTML is a no-op. Ids are unique within ``content``.
    With ``ascii_only`` the id comes from the still-escaped heading text and
    only ASCII word characters survive.
    """
    if not content:
        return ""

    make_fallback = fallback or random_fallback
    used = {match.group(2) for match in TAGGED_HEADING_PATTERN.finditer(content)}

    def replacer(match: re.Match) -> str:
        level, inner = match.group(1), match.group(2)
        text = TAG_PATTERN.sub("", inner) if ascii_only else plain_text(inner)
        heading_id = slugify_heading(text, ascii_only) or make_fallback(int(level))
        heading_id = _dedupe(heading_id, used)
        used.add(heading_id)
        return f'<h{level} id="{heading_id}">{inner}</h{level}>'

    return HEADING_PATTERN.sub(replacer, content)


def _dedupe(heading_id: str, used: set) -> str:
    if heading_id not in used:
        return heading_id
    suffix = 1
    while f"{heading_id}-{suffix}" in used:
        suffix += 1
    return f"{heading_id}-{suffix}"


def extract_headings(content: str, max_level: int = 4) -> List[Heading]:
    """Headings with ids, in document order, for building a table of contents."""
    headings: List[Heading] = []
    for match in TAGGED_HEADING_PATTERN.finditer(content or ""):
        level = int(match.group(1))
        text = plain_text(match.group(3)).strip()
        if level <= max_level and match.group(2) and text:
            headings.append(Heading(id=match.group(2), text=text, level=level))
    return headings
