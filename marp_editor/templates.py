"""Slide template catalog used when adding slides to a deck."""
from dataclasses import dataclass
from typing import Dict, List, Optional

CUSTOM_KIND = "custom"
CUSTOM_NAME = "Custom Slide"


@dataclass(frozen=True)
class SlideTemplate:
    """Display name and starter markdown for one kind of slide."""
    name: str
    content: str


_TEMPLATES: Dict[str, SlideTemplate] = {
    "cover": SlideTemplate(
        name="Cover Slide",
        content="# Presentation Title\n\n## Subtitle\n\n**Author Name**\n\n*Date*",
    ),
    "titleParagraph": SlideTemplate(
        name="Title + Paragraph",
        content=(
            "# Slide Title\n\n"
            "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod "
            "tempor incididunt ut labore et dolore magna aliqua."
        ),
    ),
    "twoColumns": SlideTemplate(
        name="Title + 2 Columns",
        content=(
            '# Slide Title\n\n<div class="columns">\n\n'
            '<div class="col">\n\n## Left Column\n\n- Point 1\n- Point 2\n- Point 3\n\n</div>\n\n'
            '<div class="col">\n\n## Right Column\n\n- Point A\n- Point B\n- Point C\n\n</div>\n\n'
            "</div>"
        ),
    ),
    "threeColumns": SlideTemplate(
        name="Title + 3 Columns",
        content=(
            '# Slide Title\n\n<div class="columns">\n\n'
            '<div class="col">\n\n## Column 1\n\n- Item 1\n- Item 2\n\n</div>\n\n'
            '<div class="col">\n\n## Column 2\n\n- Item A\n- Item B\n\n</div>\n\n'
            '<div class="col">\n\n## Column 3\n\n- Item X\n- Item Y\n\n</div>\n\n'
            "</div>"
        ),
    ),
}

# Text of the slide a fresh deck starts with
INITIAL_SLIDE_TEXT = "# My Presentation\n\n## Subtitle\n\n**Author Name**\n\n*Date*"


def get_template(kind: str) -> Optional[SlideTemplate]:
    """
    Look up a template by kind tag.

    Args:
        kind: Catalog key (``cover``, ``twoColumns``, ...)

    Returns:
        The template, or None for unknown kinds
    """
    return _TEMPLATES.get(kind)


def list_templates() -> List[str]:
    """
    List all template kinds in catalog order.
    """
    return list(_TEMPLATES)


def validate_kind(kind: str) -> bool:
    """Check if a kind tag exists in the catalog."""
    return kind in _TEMPLATES


def display_name(kind: str) -> str:
    template = get_template(kind)
    return template.name if template else CUSTOM_NAME
