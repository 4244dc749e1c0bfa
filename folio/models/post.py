from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class Author:
    name: str
    image: str
    bio: str

    def as_dict(self) -> Dict[str, str]:
        return {"name": self.name, "image": self.image, "bio": self.bio}


@dataclass(slots=True)
class Post:
    slug: str
    title: str
    description: str
    date: str
    read_time: str
    featured_image: str
    author: Author
    content: str
    tags: List[str] = field(default_factory=list)
    pinned: bool = False

    @property
    def id(self) -> str:
        return self.slug

    def as_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys the page layer expects."""
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "readTime": self.read_time,
            "tags": list(self.tags),
            "pinned": self.pinned,
            "featuredImage": self.featured_image,
            "author": self.author.as_dict(),
            "content": self.content,
        }


@dataclass(slots=True)
class Heading:
    id: str
    text: str
    level: int
