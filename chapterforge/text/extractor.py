"""Content document linearization with inline phoneme preservation.

Responsibilities:
- Walk a content document body depth-first, producing plain text and an
  SSML-annotated variant side by side.
- Record one `PhoneticAnnotation` per inline `ssml:ph` element.
"""

from __future__ import annotations

from dataclasses import dataclass

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from ..models.datatypes import ExtractedContent, PhoneticAnnotation
from .cleaners import TextCleaner
from .phonemes import phoneme_markup

DEFAULT_ALPHABET = "ipa"
PARAGRAPH_BREAK = "\n\n"

_PHONEME_ATTRIBUTES = ("ssml:ph", "ssml-ph")
_ALPHABET_ATTRIBUTES = ("ssml:alphabet", "ssml-alphabet")
_SKIPPED_TAGS = frozenset({"script", "style", "head", "nav"})
_BLOCK_TAGS = frozenset({"p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote"})


@dataclass(frozen=True, slots=True)
class _Fragment:
    """Contribution of one node to the plain and annotated buffers.

    `tail` keeps the last two plain characters written so far, including
    everything before the node, so paragraph-break decisions do not need to
    join the parts.
    """

    plain_parts: tuple[str, ...] = ()
    annotated_parts: tuple[str, ...] = ()
    annotations: tuple[PhoneticAnnotation, ...] = ()
    tail: str = ""


def _advance_tail(tail: str, text: str) -> str:
    return (tail + text)[-2:]


def _needs_paragraph_break(tail: str) -> bool:
    return bool(tail) and tail != PARAGRAPH_BREAK


def _text_fragment(
    plain: str,
    tail: str,
    annotated: str | None = None,
    annotation: PhoneticAnnotation | None = None,
) -> _Fragment:
    """Return a leaf fragment holding `plain` and its annotated form."""

    return _Fragment(
        plain_parts=(plain,),
        annotated_parts=(plain if annotated is None else annotated,),
        annotations=(annotation,) if annotation is not None else (),
        tail=_advance_tail(tail, plain),
    )


class ContentExtractor:
    """Extract plain and annotated text from one content document body."""

    def __init__(self, cleaner: TextCleaner | None = None) -> None:
        """Initialize with the whitespace cleaner shared by both buffers."""

        self._cleaner = cleaner or TextCleaner()

    def extract(self, body: Tag) -> ExtractedContent | None:
        """Linearize `body`; return `None` when it yields no text."""

        fragment = self._walk(body, "")
        plain_text = self._cleaner.clean("".join(fragment.plain_parts))
        if not plain_text:
            return None
        return ExtractedContent(
            plain_text=plain_text,
            annotated_text=self._cleaner.clean("".join(fragment.annotated_parts)),
            annotations=fragment.annotations,
        )

    def _walk(self, node: PageElement, tail: str) -> _Fragment:
        """Return the contribution of `node`, given the plain `tail` before it."""

        if isinstance(node, NavigableString):
            # Comments, CDATA, doctypes and processing instructions carry no text.
            if isinstance(node, PreformattedString):
                return _Fragment(tail=tail)
            return _text_fragment(str(node), tail)
        if not isinstance(node, Tag):
            return _Fragment(tail=tail)

        phoneme = _first_attribute(node, _PHONEME_ATTRIBUTES)
        if phoneme:
            alphabet = _first_attribute(node, _ALPHABET_ATTRIBUTES) or DEFAULT_ALPHABET
            original_text = node.get_text()
            return _text_fragment(
                original_text,
                tail,
                phoneme_markup(original_text, phoneme, alphabet),
                PhoneticAnnotation(original_text=original_text, phoneme=phoneme, alphabet=alphabet),
            )

        name = (node.name or "").lower()
        if name in _SKIPPED_TAGS:
            return _Fragment(tail=tail)

        plain_parts: list[str] = []
        annotated_parts: list[str] = []
        annotations: list[PhoneticAnnotation] = []
        if name in _BLOCK_TAGS and _needs_paragraph_break(tail):
            plain_parts.append(PARAGRAPH_BREAK)
            annotated_parts.append(PARAGRAPH_BREAK)
            tail = _advance_tail(tail, PARAGRAPH_BREAK)
        if name == "br":
            return _text_fragment("\n", tail)

        for child in node.children:
            child_fragment = self._walk(child, tail)
            plain_parts.extend(child_fragment.plain_parts)
            annotated_parts.extend(child_fragment.annotated_parts)
            annotations.extend(child_fragment.annotations)
            tail = child_fragment.tail
        return _Fragment(
            plain_parts=tuple(plain_parts),
            annotated_parts=tuple(annotated_parts),
            annotations=tuple(annotations),
            tail=tail,
        )


def _first_attribute(tag: Tag, names: tuple[str, ...]) -> str:
    """Return the first non-blank attribute value among `names`."""

    for name in names:
        value = tag.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        if value and value.strip():
            return value.strip()
    return ""
