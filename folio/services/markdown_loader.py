from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import frontmatter

from folio import config
from folio.models.post import Author, Post
from folio.services.heading_ids import FallbackFactory, counter_fallback
from folio.services.markdown_renderer import render_content
from folio.services.site_defaults import SiteDefaults, load_site_defaults


logger = logging.getLogger(__name__)

# Lookup order for a single slug; listing accepts both.
SOURCE_EXTENSIONS = (".mdx", ".md")
ALL_TAGS = "All"


def list_source_files(directory: Path) -> List[Path]:
    """Markdown sources in ``directory``, one per slug.

    A missing directory is not an error: the site still renders with no posts.
    When both ``<slug>.mdx`` and ``<slug>.md`` exist the ``.mdx`` file wins,
    matching the lookup order of :func:`find_source_file`.
    """
    if not directory.is_dir():
        logger.warning("Blog files directory %s not found, returning no posts", directory)
        return []

    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        logger.warning("Could not read blog files directory %s: %s", directory, exc)
        return []

    by_slug: Dict[str, Path] = {}
    for path in entries:
        if not path.is_file() or path.suffix not in SOURCE_EXTENSIONS:
            continue
        existing = by_slug.get(path.stem)
        if existing is not None:
            preferred = min(existing, path, key=lambda item: SOURCE_EXTENSIONS.index(item.suffix))
            logger.warning("Both %s and %s exist, using %s", existing.name, path.name, preferred.name)
            path = preferred
        by_slug[path.stem] = path
    return list(by_slug.values())


def find_source_file(slug: str, directory: Path) -> Optional[Path]:
    if not slug or "/" in slug or "\\" in slug or slug in {".", ".."}:
        return None
    for extension in SOURCE_EXTENSIONS:
        path = directory / f"{slug}{extension}"
        if path.is_file():
            return path
    return None


def load_post(
    path: Path,
    defaults: SiteDefaults,
    heading_fallback: Optional[FallbackFactory] = None,
    ascii_heading_ids: bool = False,
) -> Post:
    """Read one source file and run it through the rendering pipeline."""
    parsed = frontmatter.load(path)
    meta = parsed.metadata or {}

    return Post(
        slug=path.stem,
        title=_text(meta.get("title"), defaults.title),
        description=_text(meta.get("description"), defaults.description),
        date=_convert_date(meta.get("date"), defaults.date),
        read_time=_text(meta.get("readTime"), defaults.read_time),
        tags=_normalize_tags(meta.get("tags")),
        pinned=bool(meta.get("pinned")),
        featured_image=_text(meta.get("featuredImage"), defaults.featured_image),
        author=_build_author(meta.get("author"), defaults),
        content=render_content(
            parsed.content, heading_fallback=heading_fallback, ascii_heading_ids=ascii_heading_ids
        ),
    )


def list_posts(*, content_dir: Optional[Path] = None, skip_invalid: Optional[bool] = None) -> List[Post]:
    """Return every post, newest first.

    Equal dates are ordered by slug. A file that fails to load fails the
    whole listing unless ``skip_invalid`` (or ``FOLIO_SKIP_INVALID_POSTS``)
    is set, in which case it is logged and left out.
    """
    directory = content_dir or config.content_dir()
    if skip_invalid is None:
        skip_invalid = config.skip_invalid_posts()

    paths = list_source_files(directory)
    if not paths:
        return []

    defaults = load_site_defaults(directory)
    fallback_mode = config.heading_fallback()
    ascii_ids = config.ascii_heading_ids()
    posts: List[Post] = []
    for path in paths:
        try:
            post = load_post(path, defaults, _heading_fallback(fallback_mode), ascii_ids)
        except Exception as exc:  # pylint: disable=broad-except
            if not skip_invalid:
                raise
            logger.warning("Skipping post %s: %s", path, exc)
            continue
        posts.append(post)

    posts.sort(key=lambda item: item.slug)
    posts.sort(key=lambda item: item.date, reverse=True)
    return posts


def get_post(slug: str, *, content_dir: Optional[Path] = None) -> Optional[Post]:
    """Return the post for ``slug``, or ``None`` when it cannot be produced."""
    directory = content_dir or config.content_dir()
    path = find_source_file(slug, directory)
    if path is None:
        return None

    fallback_mode = config.heading_fallback()
    ascii_ids = config.ascii_heading_ids()
    try:
        return load_post(
            path, load_site_defaults(directory), _heading_fallback(fallback_mode), ascii_ids
        )
    except Exception:  # pylint: disable=broad-except
        logger.exception("Error reading blog post %s", slug)
        return None


def list_tags(*, content_dir: Optional[Path] = None) -> List[str]:
    """The ``"All"`` sentinel followed by each distinct tag in first-seen order."""
    tags: Dict[str, None] = {ALL_TAGS: None}
    for post in list_posts(content_dir=content_dir):
        for tag in post.tags:
            tags.setdefault(tag, None)
    return list(tags)


def list_posts_by_tag(tag: str, *, content_dir: Optional[Path] = None) -> List[Post]:
    posts = list_posts(content_dir=content_dir)
    if tag == ALL_TAGS:
        return posts
    return [post for post in posts if tag in post.tags]


def search_posts(query: str, *, content_dir: Optional[Path] = None) -> List[Post]:
    """Posts whose title, description, tags or rendered content contain ``query``, ignoring case."""
    return [post for post in list_posts(content_dir=content_dir) if matches_query(post, query)]


def matches_query(post: Post, query: str) -> bool:
    needle = query.lower()
    return (
        needle in post.title.lower()
        or needle in post.description.lower()
        or needle in post.content.lower()
        or any(needle in tag.lower() for tag in post.tags)
    )


def _heading_fallback(mode: str) -> Optional[FallbackFactory]:
    # A fresh counter per document keeps ids reproducible file by file.
    if mode == "counter":
        return counter_fallback()
    return None


def _text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    if isinstance(value, (dict, list)):
        return default
    return str(value)


def _convert_date(value: Any, default: str) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return _text(value, default)


def _build_author(value: Any, defaults: SiteDefaults) -> Author:
    if isinstance(value, str) and value.strip():
        value = {"name": value.strip()}
    if not isinstance(value, dict):
        value = {}
    return Author(
        name=_text(value.get("name"), defaults.author_name),
        image=_text(value.get("image"), defaults.author_image),
        bio=_text(value.get("bio"), defaults.author_bio),
    )


def _normalize_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, Iterable) and not isinstance(value, dict):
        tags: List[str] = []
        for item in value:
            if isinstance(item, str) and item.strip():
                tags.append(item.strip())
        return tags
    return []
