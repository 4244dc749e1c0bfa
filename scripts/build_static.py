from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from pathlib import Path
from typing import Any, Optional

BASE_DIR = Path(__file__).resolve().parent.parent

sys.path.insert(0, str(BASE_DIR))

from folio.services import markdown_loader  # noqa: E402
from folio.services.heading_ids import extract_headings  # noqa: E402

DEFAULT_OUTPUT = BASE_DIR / "site"

logger = logging.getLogger(__name__)


def ensure_output_dir(output: Path) -> None:
    if output.exists():
        shutil.rmtree(output)
    output.mkdir(parents=True, exist_ok=True)
    (output / "posts").mkdir()
    (output / ".nojekyll").write_text("", encoding="utf-8")


def write_json(destination: Path, payload: Any) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def build_site(output_dir: Path, content_dir: Optional[Path] = None) -> int:
    """Export every post, the tag index and per-post HTML. Returns the post count."""
    posts = markdown_loader.list_posts(content_dir=content_dir)
    tags = markdown_loader.list_tags(content_dir=content_dir)

    ensure_output_dir(output_dir)

    summaries = []
    for post in posts:
        data = post.as_dict()
        write_json(
            output_dir / "posts" / f"{post.slug}.json",
            {
                **data,
                "toc": [
                    {"id": heading.id, "text": heading.text, "level": heading.level}
                    for heading in extract_headings(post.content)
                ],
            },
        )
        (output_dir / "posts" / f"{post.slug}.html").write_text(post.content, encoding="utf-8")
        data.pop("content")
        summaries.append(data)

    write_json(output_dir / "posts.json", summaries)
    write_json(output_dir / "tags.json", tags)
    logger.info("Exported %d posts to %s", len(posts), output_dir)
    return len(posts)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export rendered posts as static JSON and HTML files.")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Output directory (default: ./site)")
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=None,
        help="Directory of .md/.mdx sources (default: FOLIO_CONTENT_DIR or ./blog-files)",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    args = parse_args()
    content_dir = args.content_dir.resolve() if args.content_dir else None
    build_site(args.output.resolve(), content_dir)


if __name__ == "__main__":
    main()
