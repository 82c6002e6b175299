"""
Allowlist HTML sanitizer for rendered slide markup.

Rendered slides are injected into the preview as live markup, so every
fragment passes through :class:`HtmlSanitizer` first. The filter fails
closed: anything it does not recognise as safe is removed together with
its content.
"""
import logging
from typing import FrozenSet, Iterable, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

logger = logging.getLogger(__name__)

# Elements produced by the canonical slide grammar, plus div containers
SLIDE_TAGS: FrozenSet[str] = frozenset(
    {"h1", "h2", "h3", "p", "ul", "li", "br", "strong", "em", "div"}
)

# Extra elements emitted by the markdown-it flavour
GFM_TAGS: FrozenSet[str] = SLIDE_TAGS | frozenset(
    {
        "h4", "h5", "h6", "ol", "pre", "code", "blockquote", "hr",
        "table", "thead", "tbody", "tr", "th", "td", "del",
    }
)

ALLOWED_ATTRIBUTES: FrozenSet[str] = frozenset({"class"})

# Harmless text-level wrappers: the tag goes, the text stays
UNWRAP_TAGS: FrozenSet[str] = frozenset(
    {
        "span", "a", "b", "i", "u", "s", "mark", "del", "ins", "small",
        "sub", "sup", "code", "kbd", "abbr", "font",
    }
)


class HtmlSanitizer:
    """
    Strip an HTML fragment down to an element/attribute allowlist.

    Args:
        allowed_tags: Elements kept as-is (minus disallowed attributes)
        allowed_attributes: Attributes kept on allowed elements
        unwrap_tags: Elements replaced by their sanitized children
    """

    def __init__(
        self,
        allowed_tags: Iterable[str] = SLIDE_TAGS,
        allowed_attributes: Iterable[str] = ALLOWED_ATTRIBUTES,
        unwrap_tags: Optional[Iterable[str]] = None,
    ):
        self.allowed_tags = frozenset(allowed_tags)
        self.allowed_attributes = frozenset(allowed_attributes)
        unwrap = UNWRAP_TAGS if unwrap_tags is None else frozenset(unwrap_tags)
        # An allowed tag is never unwrapped
        self.unwrap_tags = frozenset(unwrap) - self.allowed_tags

    def sanitize(self, html: str) -> str:
        """
        Return *html* with everything outside the allowlist removed.

        Args:
            html: Untrusted HTML fragment

        Returns:
            Sanitized HTML fragment (``""`` for empty input)
        """
        if not html or not html.strip():
            return ""

        soup = BeautifulSoup(html, "html.parser")
        self._clean(soup)
        return str(soup)

    def _clean(self, node: Tag) -> None:
        for child in list(node.children):
            if isinstance(child, NavigableString):
                # Comment, CData, Doctype, Declaration, ProcessingInstruction...
                if type(child) is not NavigableString:
                    child.extract()
                continue

            if not isinstance(child, Tag):
                child.extract()
                continue

            name = (child.name or "").lower()
            if name in self.allowed_tags:
                child.attrs = {
                    key: value for key, value in child.attrs.items()
                    if key.lower() in self.allowed_attributes
                }
                self._clean(child)
            elif name in self.unwrap_tags:
                self._clean(child)
                child.unwrap()
            else:
                logger.debug(f"Dropping disallowed <{name}> element")
                child.decompose()


_default_sanitizer = HtmlSanitizer()


def sanitize(html: str) -> str:
    """Sanitize *html* against the slide grammar allowlist."""
    return _default_sanitizer.sanitize(html)
