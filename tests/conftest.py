import textwrap
from pathlib import Path

import pytest


def write_post(directory: Path, filename: str, source: str) -> Path:
    """Write a markdown source, dedented so tests can indent it inline."""
    path = directory / filename
    path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
    return path


SAMPLE_POSTS = {
    "react-hooks.md": """
        ---
        title: Understanding React Hooks
        description: State and effects without classes
        date: 2024-03-10
        readTime: 8 min read
        tags: [React, JavaScript]
        pinned: true
        author:
          name: Jane Doe
        ---
        ## Getting Started!

        Hooks let function components hold state.

        ```js
        const [count, setCount] = useState(0)
        ```
        """,
    "python-tips.mdx": """
        ---
        title: Python Tips
        description: Small tricks
        date: 2024-05-01
        tags:
          - Python
        ---
        ## 2025 Roadmap

        ```python
        def foo(): pass
        ```
        """,
    "no-tags.md": """
        ---
        title: Notes
        date: 2024-03-10
        ---
        Trying REACT Native this week. Use `npx` to start.
        """,
    "css-grid.md": """
        ---
        title: Grid Layouts
        description: A react developer looks at CSS grid
        date: 2023-12-01
        tags: [CSS]
        featuredImage: /images/grid.png
        ---
        ### Columns

        ```css
        .grid { display: grid; }
        ```
        """,
}


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "blog-files"
    directory.mkdir()
    for filename, source in SAMPLE_POSTS.items():
        write_post(directory, filename, source)
    (directory / "notes.txt").write_text("not a post", encoding="utf-8")
    (directory / "drafts").mkdir()
    return directory


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "FOLIO_CONTENT_DIR",
        "FOLIO_LOG_LEVEL",
        "FOLIO_SKIP_INVALID_POSTS",
        "FOLIO_HEADING_FALLBACK",
        "FOLIO_ASCII_HEADING_IDS",
    ):
        monkeypatch.delenv(name, raising=False)
