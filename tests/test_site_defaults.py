import logging

from folio.services.site_defaults import BUILTIN_DEFAULTS, load_site_defaults, merge_defaults


def test_merge_defaults_overrides_field_by_field():
    merged = merge_defaults({"readTime": "3 min read", "author": {"name": "Ada", "bio": "  "}})

    assert merged.read_time == "3 min read"
    assert merged.author_name == "Ada"
    assert merged.author_bio == BUILTIN_DEFAULTS.author_bio
    assert merged.author_image == BUILTIN_DEFAULTS.author_image


def test_merge_defaults_ignores_non_string_values():
    merged = merge_defaults({"title": 42, "author": "not a mapping"})

    assert merged == BUILTIN_DEFAULTS


def test_load_site_defaults_without_file(tmp_path):
    assert load_site_defaults(tmp_path) == BUILTIN_DEFAULTS


def test_load_site_defaults_from_json(tmp_path):
    (tmp_path / "site.json").write_text('{"featuredImage": "/cover.png"}', encoding="utf-8")

    assert load_site_defaults(tmp_path).featured_image == "/cover.png"


def test_yaml_file_wins_over_json(tmp_path):
    (tmp_path / "site.yml").write_text("title: From YAML\n", encoding="utf-8")
    (tmp_path / "site.json").write_text('{"title": "From JSON"}', encoding="utf-8")

    assert load_site_defaults(tmp_path).title == "From YAML"


def test_broken_site_file_falls_back_to_builtins(tmp_path, caplog):
    (tmp_path / "site.yaml").write_text("author: [unclosed\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        assert load_site_defaults(tmp_path) == BUILTIN_DEFAULTS
    assert "Failed to load site defaults" in caplog.text


def test_non_mapping_site_file_falls_back_to_builtins(tmp_path, caplog):
    (tmp_path / "site.yaml").write_text("- just\n- a list\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        assert load_site_defaults(tmp_path) == BUILTIN_DEFAULTS
    assert "is not a mapping" in caplog.text
