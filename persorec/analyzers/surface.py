import re
import logging
from dataclasses import dataclass
from typing import Dict

from .base import TokenizedDocument

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"-?[,\d+]*\.?\d+")
_ABBREVIATION_RE = re.compile(r"\w\.(\w\.)+")
_EMOTICON_RE = re.compile(r"[:;8%]-[)(@\[\]|]+")
_QUESTION_END_RE = re.compile(r"\w\s*\?")

# Punctuation counted over the raw text, in output order.
_PUNCTUATION = (
    ("PERIOD", re.compile(r"\.")),
    ("COMMA", re.compile(",")),
    ("COLON", re.compile(":")),
    ("SEMIC", re.compile(";")),
    ("QMARK", re.compile(r"\?")),
    ("EXCLAM", re.compile("!")),
    ("DASH", re.compile("-")),
    ("QUOTE", re.compile('"')),
    ("APOSTRO", re.compile("'")),
    ("PARENTH", re.compile(r"[(\[{]")),
    ("OTHERP", re.compile(r"[^\w\d\s.:;?!\"'({\[,-]")),
)

LONG_WORD_LENGTH = 6


def percent(count: float, total: int) -> float:
    """100 * count / total, or NaN when there is nothing to divide by."""
    if total == 0:
        return float("nan")
    return 100.0 * count / total


def count_matches(regex, text: str) -> int:
    return sum(1 for _ in regex.finditer(text))


@dataclass
class SurfaceFeatures:
    values: Dict[str, float]
    word_count: int
    sentence_count: int
    numeric_ratio: float


class SurfaceFeatureExtractor:
    """
    Punctuation, length and lexical-diversity statistics.

    Ratios are percentages of the word count, except QMARKS which is a
    percentage of the sentence count. A zero denominator gives NaN.
    """

    def extract(self, doc: TokenizedDocument) -> SurfaceFeatures:
        text = doc.raw_text
        words = doc.words
        n_words = len(words)
        n_sentences = doc.sentence_count

        lowered = [w.lower() for w in words]
        long_words = sum(1 for w in lowered if len(w) > LONG_WORD_LENGTH)
        numbers = sum(1 for w in lowered if _NUMBER_RE.fullmatch(w))

        values: Dict[str, float] = {
            "WC": float(n_words),
            "WPS": n_words / n_sentences if n_sentences else float("nan"),
            "UNIQUE": percent(len(set(lowered)), n_words),
            "SIXLTR": percent(long_words, n_words),
            "ABBREVIATIONS": percent(count_matches(_ABBREVIATION_RE, text), n_words),
            "EMOTICONS": percent(count_matches(_EMOTICON_RE, text), n_words),
            "QMARKS": percent(count_matches(_QUESTION_END_RE, text), n_sentences),
        }

        total_punctuation = 0
        for name, regex in _PUNCTUATION:
            count = count_matches(regex, text)
            total_punctuation += count
            values[name] = percent(count, n_words)
        values["ALLPCT"] = percent(total_punctuation, n_words)

        return SurfaceFeatures(
            values=values,
            word_count=n_words,
            sentence_count=n_sentences,
            numeric_ratio=percent(numbers, n_words),
        )
