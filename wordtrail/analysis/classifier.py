"""Single-pass character classifier."""

from wordtrail.analysis import patterns
from wordtrail.analysis.models import CountRecord
from wordtrail.config import Settings, get_settings


class CharacterClassifier:
    """Counts characters of content text into the six CountRecord categories.

    Each character is tested in a fixed order: digit, ASCII letter,
    logographic, punctuation, whitespace. The first enabled category that
    matches wins; a character matching no enabled category is not counted.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def classify(self, text: str) -> CountRecord:
        s = self.settings
        script_a = script_b = punctuation = digits = whitespace = words = 0

        i = 0
        n = len(text)
        while i < n:
            char = text[i]

            if s.track_digits and patterns.is_digit(char):
                digits += 1
            elif s.track_script_b and patterns.is_alphabetic(char):
                # Letter runs are consumed whole, so ``char`` always starts one.
                j = i + 1
                while j < n and patterns.is_alphabetic(text[j]):
                    j += 1
                run_length = j - i
                if run_length == 1:
                    script_b += 1
                elif not patterns.looks_like_roman_numeral(text[i:j]):
                    script_b += run_length
                    if s.show_word_count:
                        words += 1
                i = j
                continue
            elif s.track_script_a and patterns.is_logographic(char):
                script_a += 1
            elif s.track_punctuation and patterns.is_punctuation(char):
                punctuation += 1
            elif s.track_whitespace and patterns.is_whitespace(char):
                whitespace += 1

            i += 1

        return CountRecord(
            script_a=script_a,
            script_b=script_b,
            punctuation=punctuation,
            digits=digits,
            whitespace=whitespace,
            words=words,
        )


def classify(text: str, settings: Settings | None = None) -> CountRecord:
    """Classify ``text`` with the given (or cached) settings."""
    return CharacterClassifier(settings).classify(text)


def naive_count(text: str, settings: Settings | None = None) -> CountRecord:
    """Per-character counts with no word runs and no Roman-numeral exclusion.

    Used as the unprocessed baseline when checking how much the markup
    stripping and run handling change the figures.
    """
    s = settings or get_settings()
    counts = dict.fromkeys(("script_a", "script_b", "punctuation", "digits", "whitespace"), 0)
    for char in text:
        if patterns.is_digit(char):
            counts["digits"] += 1
        elif patterns.is_alphabetic(char):
            counts["script_b"] += 1
        elif patterns.is_logographic(char):
            counts["script_a"] += 1
        elif patterns.is_punctuation(char):
            counts["punctuation"] += 1
        elif char == " ":
            counts["whitespace"] += 1
    words = len(text.split()) if s.show_word_count else 0
    return CountRecord(**counts, words=words)
