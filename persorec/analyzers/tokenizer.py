import re
import logging
from typing import List

from .base import TokenizedDocument

logger = logging.getLogger(__name__)

_NON_WORD_RE = re.compile(r"\W+\s*")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_BOUNDARY_RE = re.compile(r"\s*[.!?]+\s+")


def tokenize(text: str) -> List[str]:
    """
    Split text into words separated by non-word characters.

    Text without any word character yields a single empty token, so callers
    should count real words with ``TokenizedDocument.words``.
    """
    words_only = _NON_WORD_RE.sub(" ", text).strip()
    return _WHITESPACE_RE.split(words_only)


def split_sentences(text: str) -> List[str]:
    """Split text on runs of '.', '!' or '?' followed by whitespace."""
    parts = _SENTENCE_BOUNDARY_RE.split(text)
    if len(parts) == 1:
        return parts
    while parts and parts[-1] == "":
        parts.pop()
    return parts


class TextTokenizer:
    """
    Word and sentence splitter for raw English text.

    Both splits are regex based and independent of each other: a sentence
    boundary does not have to fall on a token boundary.
    """

    def tokenize(self, source_id: str, text: str) -> TokenizedDocument:
        tokens = tokenize(text)
        sentences = split_sentences(text)
        doc = TokenizedDocument(
            source_id=source_id,
            raw_text=text,
            tokens=tokens,
            sentences=sentences,
        )
        logger.debug(
            f"Input text {source_id} split into {doc.word_count} words "
            f"and {doc.sentence_count} sentences"
        )
        return doc
