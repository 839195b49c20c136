import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

from ..lookups.base import BaseNormLookup, LookupOutcome
from ..schema import NORM_NAMES, POS_PRIORITY

logger = logging.getLogger(__name__)


@dataclass
class NormAccumulator:
    """Running sum and success count per norm for one document."""

    norms: Sequence[str] = NORM_NAMES
    sums: Dict[str, float] = field(default_factory=dict)
    counts: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        for norm in self.norms:
            self.sums.setdefault(norm, 0.0)
            self.counts.setdefault(norm, 0)

    def add(self, norm: str, value: float) -> None:
        self.sums[norm] += value
        self.counts[norm] += 1

    def averages(self) -> Dict[str, float]:
        return {
            norm: self.sums[norm] / self.counts[norm] if self.counts[norm] else float("nan")
            for norm in self.norms
        }


class NormLookupAggregator:
    """
    Averages psycholinguistic norms over the words of a document.

    The grammatical category used for each word is the first tag of the
    priority list that the lookup reports for it, with no context-based
    disambiguation. Every occurrence of a word counts.
    """

    def __init__(
        self,
        lookup: BaseNormLookup,
        norms: Sequence[str] = NORM_NAMES,
        pos_priority: Sequence[str] = POS_PRIORITY,
    ):
        self.lookup = lookup
        self.norms = tuple(norms)
        self.pos_priority = tuple(pos_priority)

    def resolve_tag(self, word: str) -> Optional[str]:
        available = self.lookup.available_tags(word)
        for tag in self.pos_priority:
            if tag in available:
                return tag
        return None

    def average_norms(self, words: Iterable[str]) -> Dict[str, float]:
        acc = NormAccumulator(self.norms)
        for word in words:
            if not self.lookup.contains(word):
                continue
            tag = self.resolve_tag(word)
            if tag is None:
                continue
            for norm in self.norms:
                result = self.lookup.fetch(word, tag, norm)
                if result.outcome is LookupOutcome.OK:
                    acc.add(norm, result.value)
                elif result.outcome is LookupOutcome.NOT_FOUND:
                    logger.warning(f"Entry {word}/{tag}/{norm} not found")
        return acc.averages()
