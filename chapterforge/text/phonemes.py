"""SSML phoneme markup and pronunciation lexicon application."""

from __future__ import annotations

import html
import re
from typing import Sequence

from ..models.datatypes import PronunciationLexicon


def phoneme_markup(text: str, phoneme: str, alphabet: str) -> str:
    """Wrap `text` in an SSML `<phoneme>` element."""

    return (
        f'<phoneme alphabet="{html.escape(alphabet, quote=True)}" '
        f'ph="{html.escape(phoneme, quote=True)}">{text}</phoneme>'
    )


def apply_lexicon(text: str, lexicons: Sequence[PronunciationLexicon]) -> str:
    """Wrap every whole-word, case-insensitive grapheme match in phoneme markup.

    Lexicons apply in list order and entries in declaration order. Each rule
    runs over the output of the previous one, so a later grapheme that occurs
    inside an earlier wrapper is wrapped again. The wrapper holds the
    entry's grapheme, whatever the casing of the matched text.
    """

    result = text
    for lexicon in lexicons:
        for entry in lexicon.entries:
            pattern = re.compile(rf"\b{re.escape(entry.grapheme)}\b", re.IGNORECASE)
            result = pattern.sub(
                lambda _match, entry=entry: phoneme_markup(entry.grapheme, entry.phoneme, entry.alphabet),
                result,
            )
    return result
