from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

SITE_FILE_NAMES = ("site.yaml", "site.yml", "site.json")


@dataclass(frozen=True, slots=True)
class SiteDefaults:
    title: str = "Untitled"
    description: str = ""
    date: str = ""
    read_time: str = "5 min read"
    featured_image: str = "/placeholder.svg?height=400&width=800"
    author_name: str = "Anonymous"
    author_image: str = "/placeholder.svg?height=100&width=100"
    author_bio: str = "Software Engineer & Tech Blogger"


BUILTIN_DEFAULTS = SiteDefaults()

# site file key -> SiteDefaults attribute
_TOP_LEVEL_KEYS = {
    "title": "title",
    "description": "description",
    "readTime": "read_time",
    "featuredImage": "featured_image",
}
_AUTHOR_KEYS = {
    "name": "author_name",
    "image": "author_image",
    "bio": "author_bio",
}


def _read_site_file(directory: Path) -> dict:
    for name in SITE_FILE_NAMES:
        path = directory / name
        if not path.is_file():
            continue
        try:
            if path.suffix in {".yaml", ".yml"}:
                with path.open("r", encoding="utf-8") as fp:
                    data = yaml.safe_load(fp) or {}
            else:
                data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.warning("Failed to load site defaults from %s: %s", path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Site defaults file %s is not a mapping", path)
            return {}
        return data
    return {}


def merge_defaults(overrides: Mapping[str, Any], base: SiteDefaults = BUILTIN_DEFAULTS) -> SiteDefaults:
    """Merge a site file mapping over ``base``, one field at a time.

    Blank or non-string values leave the base value in place.
    """
    changes = {}
    for key, attr in _TOP_LEVEL_KEYS.items():
        value = _clean(overrides.get(key))
        if value is not None:
            changes[attr] = value

    author = overrides.get("author")
    if isinstance(author, Mapping):
        for key, attr in _AUTHOR_KEYS.items():
            value = _clean(author.get(key))
            if value is not None:
                changes[attr] = value

    return replace(base, **changes)


def load_site_defaults(directory: Path) -> SiteDefaults:
    """Site-wide defaults for ``directory``, read fresh on every call."""
    return merge_defaults(_read_site_file(directory))


def _clean(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
