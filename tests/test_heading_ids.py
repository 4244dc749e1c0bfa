import re

import pytest

from folio.services.heading_ids import (
    add_heading_ids,
    counter_fallback,
    extract_headings,
    slugify_heading,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Getting Started!", "getting-started"),
        ("2025 Roadmap", "heading-2025-roadmap"),
        ("  Spaced   Out  ", "spaced-out"),
        ("snake_case stays", "snake_case-stays"),
        ("!!!", ""),
    ],
)
def test_slugify_heading(text, expected):
    assert slugify_heading(text) == expected


def test_add_heading_ids_injects_id():
    assert add_heading_ids("<h2>Getting Started!</h2>") == '<h2 id="getting-started">Getting Started!</h2>'


def test_add_heading_ids_strips_nested_markup():
    content = "<h3>Using <code>pytest</code> &amp; Friends</h3>"

    assert add_heading_ids(content) == '<h3 id="using-pytest-friends">Using <code>pytest</code> &amp; Friends</h3>'


def test_add_heading_ids_covers_levels_two_to_six_only():
    content = "<h1>Title</h1>\n<h2>A</h2>\n<h4>B</h4>\n<h6>C</h6>"

    result = add_heading_ids(content)

    assert "<h1>Title</h1>" in result
    assert '<h2 id="a">A</h2>' in result
    assert '<h4 id="b">B</h4>' in result
    assert '<h6 id="c">C</h6>' in result


def test_duplicate_headings_get_unique_ids():
    result = add_heading_ids("<h2>Setup</h2>\n<h3>Setup</h3>\n<h2>Setup</h2>")

    assert re.findall(r'id="([^"]+)"', result) == ["setup", "setup-1", "setup-2"]


def test_existing_ids_are_kept_and_reserved():
    result = add_heading_ids('<h2 id="setup">Intro</h2>\n<h2>Setup</h2>')

    assert result == '<h2 id="setup">Intro</h2>\n<h2 id="setup-1">Setup</h2>'


def test_empty_heading_gets_random_fallback():
    result = add_heading_ids("<h2>🚀</h2>")

    assert re.fullmatch(r'<h2 id="heading-2-[a-z0-9]{9}">🚀</h2>', result)


def test_counter_fallback_is_deterministic():
    content = "<h2>!!!</h2>\n<h3>???</h3>"

    first = add_heading_ids(content, fallback=counter_fallback())
    second = add_heading_ids(content, fallback=counter_fallback())

    assert first == '<h2 id="heading-2-1">!!!</h2>\n<h3 id="heading-3-2">???</h3>'
    assert first == second


def test_add_heading_ids_is_idempotent():
    once = add_heading_ids("<h2>One</h2>\n<h2>One</h2>\n<h3>!!!</h3>")

    assert add_heading_ids(once) == once


def test_add_heading_ids_empty_input():
    assert add_heading_ids("") == ""


def test_extract_headings_for_table_of_contents():
    content = add_heading_ids(
        "<h2>Intro</h2>\n<h3>Details <em>here</em></h3>\n<h4>Deep</h4>\n<h5>Deeper</h5>"
    )

    headings = extract_headings(content)

    assert [(h.id, h.text, h.level) for h in headings] == [
        ("intro", "Intro", 2),
        ("details-here", "Details here", 3),
        ("deep", "Deep", 4),
    ]


def test_unicode_ids_by_default():
    content = "<h2>Über uns</h2><h2>Q&amp;A</h2>"

    assert add_heading_ids(content) == '<h2 id="über-uns">Über uns</h2><h2 id="qa">Q&amp;A</h2>'


def test_ascii_only_reproduces_older_ids():
    content = "<h2>Über uns</h2><h2>Q&amp;A</h2>"

    assert add_heading_ids(content, ascii_only=True) == (
        '<h2 id="ber-uns">Über uns</h2><h2 id="qampa">Q&amp;A</h2>'
    )


def test_ascii_only_uses_fallback_when_nothing_is_left():
    assert add_heading_ids("<h2>日本語</h2>", fallback=counter_fallback(), ascii_only=True) == (
        '<h2 id="heading-2-1">日本語</h2>'
    )
