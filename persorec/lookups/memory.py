from typing import Dict, Mapping, Optional, Set

from .base import BaseNormLookup, LookupResult

NormEntries = Mapping[str, Mapping[str, Mapping[str, Optional[float]]]]


class InMemoryNormLookup(BaseNormLookup):
    """
    Norm lookup over a nested mapping ``word -> tag -> norm -> value``.

    A ``None`` value marks a norm that is not defined for that word/tag
    entry. Words are matched case-insensitively.
    """

    name = "memory"

    def __init__(self, entries: NormEntries = None, config: dict = None):
        super().__init__(config)
        entries = entries if entries is not None else self.config.get("entries", {})
        self._entries: Dict[str, Dict[str, Dict[str, Optional[float]]]] = {}
        for word, tags in entries.items():
            slot = self._entries.setdefault(word.lower(), {})
            for tag, norms in tags.items():
                slot.setdefault(tag.upper(), {}).update(norms)

    @classmethod
    def is_available(cls) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def contains(self, word: str) -> bool:
        return word.lower() in self._entries

    def available_tags(self, word: str) -> Set[str]:
        return set(self._entries.get(word.lower(), {}))

    def fetch(self, word: str, tag: str, norm: str) -> LookupResult:
        entry = self._entries.get(word.lower(), {}).get(tag.upper())
        if entry is None or norm not in entry:
            return LookupResult.not_found()
        value = entry[norm]
        if value is None:
            return LookupResult.not_applicable()
        return LookupResult.ok(value)
