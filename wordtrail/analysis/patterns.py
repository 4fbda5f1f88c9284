"""Character class tests used by the classifier.

Ranges are inclusive code point pairs.
"""

import string

LOGOGRAPHIC_RANGES: tuple[tuple[int, int], ...] = (
    (0x3300, 0x33FF),  # CJK compatibility
    (0x3400, 0x4DBF),  # CJK unified ideographs extension A
    (0x4E00, 0x9FFF),  # CJK unified ideographs
    (0xF900, 0xFAFF),  # CJK compatibility ideographs
    (0xFE30, 0xFE4F),  # CJK compatibility forms
    (0x20000, 0x2A6DF),  # extension B
    (0x2A700, 0x2B73F),  # extension C
    (0x2B740, 0x2B81F),  # extension D
    (0x2B820, 0x2CEAF),  # extension E
)

FULL_WIDTH_DIGIT_RANGE = (0xFF10, 0xFF19)

FULL_WIDTH_PUNCTUATION_RANGES: tuple[tuple[int, int], ...] = (
    (0xFF01, 0xFF0F),
    (0xFF1A, 0xFF20),
    (0xFF3B, 0xFF40),
    (0xFF5B, 0xFF60),
    (0xFF61, 0xFF65),
    (0xFFE0, 0xFFE6),
)

ASCII_LETTERS = frozenset(string.ascii_letters)
ASCII_DIGITS = frozenset(string.digits)
# Word characters in the ASCII sense: letters, digits and underscore.
ASCII_WORD_CHARS = ASCII_LETTERS | ASCII_DIGITS | {"_"}
WHITESPACE_CHARS = frozenset(" \t\n\r")
ROMAN_NUMERAL_LETTERS = frozenset("IVXLCDM")


def _in_ranges(code: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(low <= code <= high for low, high in ranges)


def is_digit(char: str) -> bool:
    if char in ASCII_DIGITS:
        return True
    low, high = FULL_WIDTH_DIGIT_RANGE
    return low <= ord(char) <= high


def is_alphabetic(char: str) -> bool:
    return char in ASCII_LETTERS


def is_logographic(char: str) -> bool:
    return _in_ranges(ord(char), LOGOGRAPHIC_RANGES)


def is_full_width_punctuation(char: str) -> bool:
    return _in_ranges(ord(char), FULL_WIDTH_PUNCTUATION_RANGES)


def is_punctuation(char: str) -> bool:
    """Anything that is not a word character, whitespace, a digit or logographic.

    Non-ASCII letters fall in here too; only ASCII letters form words.
    """
    if is_full_width_punctuation(char):
        return True
    return not (
        char in ASCII_WORD_CHARS
        or char.isspace()
        or is_digit(char)
        or is_logographic(char)
    )


def is_whitespace(char: str) -> bool:
    return char in WHITESPACE_CHARS


def looks_like_roman_numeral(word: str) -> bool:
    """True when every letter of ``word`` is one of I V X L C D M (any case)."""
    return bool(word) and all(letter in ROMAN_NUMERAL_LETTERS for letter in word.upper())
