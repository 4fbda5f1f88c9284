"""Text analysis engine: markup stripping and character classification."""

from wordtrail.analysis.analyzer import TextAnalyzer
from wordtrail.analysis.classifier import CharacterClassifier, classify
from wordtrail.analysis.markup import MarkupStripper, StripState, strip_markup
from wordtrail.analysis.models import AccuracyReport, CountRecord

__all__ = [
    "AccuracyReport",
    "CharacterClassifier",
    "CountRecord",
    "MarkupStripper",
    "StripState",
    "TextAnalyzer",
    "classify",
    "strip_markup",
]
