from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from folio.services import markdown_loader
from folio.services.heading_ids import extract_headings


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/posts", name="list_posts")
def list_posts(
    tag: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
) -> List[Dict[str, Any]]:
    """All posts, newest first, optionally narrowed by tag and search query."""
    try:
        if tag:
            posts = markdown_loader.list_posts_by_tag(tag)
        else:
            posts = markdown_loader.list_posts()
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("Unexpected error listing posts: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to retrieve posts") from exc

    if q:
        posts = [post for post in posts if markdown_loader.matches_query(post, q)]
    return [post.as_dict() for post in posts]


@router.get("/posts/{slug}", name="post_detail")
def post_detail(slug: str) -> Dict[str, Any]:
    post = markdown_loader.get_post(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post.as_dict()


@router.get("/posts/{slug}/toc", name="post_toc")
def post_toc(slug: str) -> List[Dict[str, Any]]:
    """Table of contents entries (h2 to h4) for a post."""
    post = markdown_loader.get_post(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return [
        {"id": heading.id, "text": heading.text, "level": heading.level}
        for heading in extract_headings(post.content)
    ]


@router.get("/tags", name="list_tags")
def list_tags() -> List[str]:
    try:
        return markdown_loader.list_tags()
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("Unexpected error listing tags: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to retrieve tags") from exc
