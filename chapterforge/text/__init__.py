"""Text extraction and classification components.

This package linearizes content documents, infers chapter titles, classifies
narrative content, and applies pronunciation lexicons.
"""

from .classifier import ClassificationResult, NarrativeClassifier
from .cleaners import TextCleaner
from .durations import estimate_duration_seconds, format_duration
from .extractor import ContentExtractor
from .phonemes import apply_lexicon, phoneme_markup
from .titles import TitleInferenceEngine

__all__ = [
    "ClassificationResult",
    "ContentExtractor",
    "NarrativeClassifier",
    "TextCleaner",
    "TitleInferenceEngine",
    "apply_lexicon",
    "estimate_duration_seconds",
    "format_duration",
    "phoneme_markup",
]
