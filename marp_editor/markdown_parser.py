"""
Markdown to slide HTML conversion.

The default ``simple`` flavour implements the small slide grammar used by
the editor preview. Rendering runs in three stages:

1. a tokenizer splits the text into blank-line separated blocks and builds
   a block tree (``<div class=...>`` containers hold their own blocks);
2. each block becomes markup, with ``**strong**`` and then ``*em*``
   substituted in text segments only, never inside tags;
3. the markup goes through the allowlist sanitizer.

The inline rules are single lazy substitution passes, strong before em,
with no nesting: ``***x***`` renders as ``<strong>*x</strong>*``.

The ``gfm`` flavour renders with markdown-it-py instead (soft breaks
become ``<br>``, tables and strikethrough enabled) and is sanitized with a
wider allowlist. The two flavours are separate; neither falls back to the
other.
"""
import html
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Tuple, Union

from markdown_it import MarkdownIt

from .sanitizer import GFM_TAGS, SLIDE_TAGS, HtmlSanitizer

logger = logging.getLogger(__name__)

FLAVORS = ("simple", "gfm")

_BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")
_LEADING_SPACE_RE = re.compile(r"\s*")
_CONTAINER_OPEN_RE = re.compile(
    r"<div\b[^>]*\bclass\s*=\s*(\"[^\"]*\"|'[^']*'|[^\s>]+)[^>]*>", re.IGNORECASE
)
_DIV_TAG_RE = re.compile(r"<div\b[^>]*>|</div\s*>", re.IGNORECASE)
_HEADING_RE = re.compile(r"^(#{1,3}) (.*)$")
_TAG_RE = re.compile(r"(<[^>]*>)")

_INLINE_RULES: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"\*\*(.*?)\*\*"), "strong"),
    (re.compile(r"\*(.*?)\*"), "em"),
)


# ----------------------------------------------------------------------
# Block tree
# ----------------------------------------------------------------------
@dataclass
class Heading:
    level: int
    text: str


@dataclass
class BulletList:
    # One list of source lines per item; extra lines are continuations
    items: List[List[str]]


@dataclass
class Paragraph:
    lines: List[str]


@dataclass
class LiteralText:
    """Text shown escaped, e.g. a ``<div`` that never closes."""
    text: str


@dataclass
class Container:
    open_tag: str
    children: List["Block"] = field(default_factory=list)


Block = Union[Heading, BulletList, Paragraph, LiteralText, Container]


def _sub_outside_tags(pattern: re.Pattern, tag: str, text: str) -> str:
    parts = _TAG_RE.split(text)
    for i in range(0, len(parts), 2):
        if parts[i]:
            parts[i] = pattern.sub(lambda m: f"<{tag}>{m.group(1)}</{tag}>", parts[i])
    return "".join(parts)


def apply_inline(text: str) -> str:
    """Run the strong and em substitution passes over *text*."""
    for pattern, tag in _INLINE_RULES:
        text = _sub_outside_tags(pattern, tag, text)
    return text


class MarkdownParser:
    """
    Slide markdown parser.

    Args:
        flavor: ``simple`` (slide grammar, the default) or ``gfm``
            (markdown-it-py backed)
    """

    def __init__(self, flavor: str = "simple"):
        if flavor not in FLAVORS:
            raise ValueError(f"Unknown markdown flavor '{flavor}', expected one of {FLAVORS}")
        self.flavor = flavor

        if flavor == "gfm":
            self.markdown_processor = MarkdownIt('commonmark', {
                'html': True,          # Containers are written as raw <div> blocks
                'breaks': True,        # Same as the export's `breaks: true`
            })
            self.markdown_processor.enable(['table', 'strikethrough'])
            self.sanitizer = HtmlSanitizer(allowed_tags=GFM_TAGS)
        else:
            self.markdown_processor = None
            self.sanitizer = HtmlSanitizer(allowed_tags=SLIDE_TAGS)

    def parse(self, markdown_text: str) -> str:
        """
        Parse slide markdown to sanitized HTML.

        Args:
            markdown_text: Raw markdown of a single slide

        Returns:
            Sanitized HTML fragment; ``""`` for empty input
        """
        if not markdown_text or not markdown_text.strip():
            return ""

        if self.markdown_processor is not None:
            dirty = self.markdown_processor.render(markdown_text)
        else:
            dirty = self.to_html(self.tokenize(markdown_text))

        return self.sanitizer.sanitize(dirty)

    # ------------------------------------------------------------------
    # Tokenizer / block tree builder
    # ------------------------------------------------------------------
    def tokenize(self, markdown_text: str) -> List[Block]:
        """Build the block tree for *markdown_text*."""
        text = markdown_text.replace("\r\n", "\n").replace("\r", "\n")
        return self._segment(text)

    def _segment(self, text: str) -> List[Block]:
        blocks: List[Block] = []
        pos = 0
        length = len(text)

        while True:
            pos = _LEADING_SPACE_RE.match(text, pos).end()
            if pos >= length:
                break

            if text[pos:pos + 4].lower() == "<div":
                container, end = self._read_container(text, pos)
                if container is not None:
                    blocks.append(container)
                    pos = end
                    continue
                end = self._block_end(text, pos)
                logger.debug("Unmatched <div> container, rendering as text")
                blocks.append(LiteralText(text[pos:end].strip()))
                pos = end
                continue

            end = self._block_end(text, pos)
            blocks.extend(self._classify(text[pos:end].strip()))
            pos = end

        return blocks

    @staticmethod
    def _block_end(text: str, pos: int) -> int:
        match = _BLANK_LINE_RE.search(text, pos)
        return match.start() if match else len(text)

    def _read_container(self, text: str, pos: int):
        """Return ``(Container, end)`` or ``(None, pos)`` when unmatched."""
        open_match = _CONTAINER_OPEN_RE.match(text, pos)
        if not open_match:
            return None, pos

        depth = 0
        for match in _DIV_TAG_RE.finditer(text, pos):
            if match.group(0).startswith("</"):
                depth -= 1
                if depth == 0:
                    inner = text[open_match.end():match.start()]
                    container = Container(open_tag=open_match.group(0), children=self._segment(inner))
                    return container, match.end()
            else:
                depth += 1

        return None, pos

    def _classify(self, block: str) -> List[Block]:
        first, _, rest = block.partition("\n")

        heading = _HEADING_RE.match(first)
        if heading:
            result: List[Block] = [Heading(level=len(heading.group(1)), text=heading.group(2).strip())]
            if rest.strip():
                result.extend(self._segment(rest))
            return result

        if block.startswith("- "):
            items: List[List[str]] = []
            for raw in block.split("\n"):
                # "- " may reach here as "-" once the block is stripped
                if raw.startswith("- ") or raw.rstrip() == "-":
                    items.append([raw[2:].strip()])
                elif raw.strip():
                    items[-1].append(raw.strip())
            return [BulletList(items=items)]

        return [Paragraph(lines=[line.rstrip() for line in block.split("\n")])]

    # ------------------------------------------------------------------
    # Markup
    # ------------------------------------------------------------------
    def to_html(self, blocks: List[Block], inline: Callable[[str], str] = apply_inline) -> str:
        """Render a block tree to (unsanitized) HTML."""
        return "".join(self._block_html(block, inline) for block in blocks)

    def _block_html(self, block: Block, inline: Callable[[str], str]) -> str:
        if isinstance(block, Container):
            return f"{block.open_tag}{self.to_html(block.children, inline)}</div>"
        if isinstance(block, Heading):
            return f"<h{block.level}>{inline(block.text)}</h{block.level}>"
        if isinstance(block, BulletList):
            items = "".join(
                "<li>" + "<br>".join(inline(line) for line in item if line) + "</li>"
                for item in block.items
            )
            return f"<ul>{items}</ul>"
        if isinstance(block, LiteralText):
            escaped = "<br>".join(html.escape(line) for line in block.text.split("\n"))
            return f"<p>{escaped}</p>"
        return "<p>" + "<br>".join(inline(line) for line in block.lines) + "</p>"


_default_parser = MarkdownParser()


def render(markdown_text: str) -> str:
    """Render slide markdown with the default (``simple``) parser."""
    return _default_parser.parse(markdown_text)
