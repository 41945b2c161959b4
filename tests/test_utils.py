"""Slug and rich text helper tests"""
from quizcms.utils import generate_media_slug, rich_text_to_plain, slugify, strip_year


def test_slugify():
    assert slugify("Movies") == "movies"
    assert slugify("  Extra   Credit ") == "extra-credit"
    assert slugify("Rock & Roll!") == "rock-roll"
    assert slugify("---") == ""


def test_generate_media_slug():
    assert generate_media_slug("Blade Runner", "Ridley Scott", 1982) == "blade-runner-ridley-scott-1982"
    assert generate_media_slug("Blue", "Joni Mitchell") == "blue-joni-mitchell"


def test_strip_year():
    assert strip_year("blade-runner-ridley-scott-1982") == "blade-runner-ridley-scott"
    assert strip_year("2001-a-space-odyssey") == "2001-a-space-odyssey"


def test_rich_text_plain_string():
    assert rich_text_to_plain("  Hello  ") == "Hello"
    assert rich_text_to_plain(None) == ""


def test_rich_text_lexical_blocks():
    value = {
        "root": {
            "type": "root",
            "children": [
                {"type": "heading", "children": [{"type": "text", "text": "Title"}]},
                {
                    "type": "paragraph",
                    "children": [
                        {"type": "text", "text": "Line one"},
                        {"type": "linebreak"},
                        {"type": "text", "text": "Line two"},
                    ],
                },
                {
                    "type": "list",
                    "children": [
                        {"type": "listitem", "children": [{"type": "text", "text": "First"}]},
                        {"type": "listitem", "children": [{"type": "text", "text": "Second"}]},
                    ],
                },
                {"type": "paragraph", "children": []},
            ],
        }
    }

    assert rich_text_to_plain(value) == "Title\n\nLine one\nLine two\n\nFirst\n\nSecond"
