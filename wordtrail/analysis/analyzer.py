"""Text analysis: markup stripping followed by classification."""

from wordtrail.analysis.classifier import CharacterClassifier, naive_count
from wordtrail.analysis.markup import MarkupStripper
from wordtrail.analysis.models import AccuracyReport, CountRecord
from wordtrail.config import Settings, get_settings


class TextAnalyzer:
    """Strips a document and classifies what is left."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.stripper = MarkupStripper()
        self.classifier = CharacterClassifier(self.settings)

    def analyze_text(self, raw_text: str) -> CountRecord:
        return self.classifier.classify(self.stripper.strip(raw_text))

    def total(self, record: CountRecord) -> int:
        """Daily total of ``record`` under the current tracking options."""
        return record.total_for(self.settings.enabled_categories())

    def simple_word_count(self, raw_text: str) -> int:
        """Whitespace-separated tokens in the stripped text."""
        return len(self.stripper.strip(raw_text).split())

    def compare_counts(self, raw_text: str) -> AccuracyReport:
        """Compare tracked counts with naive counts over the raw document."""
        content = self.stripper.strip(raw_text)
        tracked = self.classifier.classify(content)
        naive = naive_count(raw_text, self.settings)
        return AccuracyReport(
            tracked=tracked,
            tracked_total=self.total(tracked),
            naive=naive,
            naive_total=naive.characters,
            simple_word_count=len(content.split()),
            raw_length=len(raw_text),
            stripped_length=len(content),
        )
