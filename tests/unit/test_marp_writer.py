"""Test Marp export and import."""

import textwrap

from marp_editor.deck import Deck
from marp_editor.marp_writer import SLIDE_SEPARATOR, generate_marp, parse_marp, read_marp, write_marp
from marp_editor.models import StyleSettings


def _three_slide_deck():
    deck = Deck()
    deck.add_slide("titleParagraph")
    deck.add_slide("twoColumns")
    return deck


def test_exact_document_for_single_slide():
    deck = Deck.from_texts(["# Hello\n\nWorld"])
    doc = generate_marp(deck, StyleSettings())

    assert doc == (
        "---\n"
        "marp: true\n"
        "theme: default\n"
        "paginate: true\n"
        "breaks: true\n"
        "---\n"
        "<style>\n"
        "section { font-size: 32px; line-height: 1.5; }\n"
        ".columns { display: flex; gap: 2rem; }\n"
        ".columns > .col { flex: 1; }\n"
        "</style>\n"
        "\n"
        "# Hello\n\nWorld"
    )


def test_three_slides_have_two_separators():
    doc = generate_marp(_three_slide_deck(), StyleSettings())

    assert doc.count(SLIDE_SEPARATOR) == 2
    assert doc.startswith("---\nmarp: true\n")
    assert doc.count("marp: true") == 1
    assert doc.count("<style>") == 1
    assert not doc.endswith(SLIDE_SEPARATOR)


def test_slides_in_deck_order():
    deck = Deck.from_texts(["# One", "# Two", "# Three"])
    deck.reorder(2, 0)
    doc = generate_marp(deck, StyleSettings())

    assert doc.endswith("# Three\n\n---\n\n# One\n\n---\n\n# Two")


def test_style_settings_interpolated():
    settings = StyleSettings(font_size=24, line_spacing=2.0)
    doc = generate_marp(Deck(), settings)

    assert "section { font-size: 24px; line-height: 2; }" in doc


def test_write_marp(tmp_path):
    out = write_marp(tmp_path / "out" / "deck.md", Deck(), StyleSettings())

    assert out.exists()
    assert out.read_text(encoding="utf-8") == generate_marp(Deck(), StyleSettings())


def test_round_trip():
    deck = _three_slide_deck()
    settings = StyleSettings(font_size=20, line_spacing=1.8)

    texts, parsed = parse_marp(generate_marp(deck, settings))

    assert texts == [slide.text for slide in deck]
    assert parsed == settings


def test_parse_size_directive():
    doc = textwrap.dedent("""\
        ---
        marp: true
        size: 4:3
        ---

        # A

        ---

        # B
        """)
    texts, settings = parse_marp(doc)

    assert texts == ["# A", "# B"]
    assert settings.aspect_ratio == "4:3"
    assert settings.font_size == 32


def test_parse_without_front_matter():
    texts, settings = parse_marp("# Only slide\n\ntext")
    assert texts == ["# Only slide\n\ntext"]
    assert settings == StyleSettings()


def test_parse_empty_document():
    texts, _ = parse_marp("")
    assert texts == [""]


def test_parse_clamps_style_values():
    doc = "---\nmarp: true\n---\n<style>\nsection { font-size: 90px; line-height: 4; }\n</style>\n\n# A"
    texts, settings = parse_marp(doc)

    assert texts == ["# A"]
    assert settings.font_size == 48
    assert settings.line_spacing == 2.5


def test_read_marp(tmp_path):
    path = tmp_path / "deck.md"
    path.write_text(generate_marp(Deck.from_texts(["# X", "# Y"]), StyleSettings()), encoding="utf-8")

    texts, _ = read_marp(path)
    assert texts == ["# X", "# Y"]
