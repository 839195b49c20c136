from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set


class LookupOutcome(Enum):
    OK = "ok"
    NOT_APPLICABLE = "not_applicable"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class LookupResult:
    outcome: LookupOutcome
    value: Optional[float] = None

    @classmethod
    def ok(cls, value: float) -> "LookupResult":
        return cls(LookupOutcome.OK, float(value))

    @classmethod
    def not_applicable(cls) -> "LookupResult":
        return cls(LookupOutcome.NOT_APPLICABLE)

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(LookupOutcome.NOT_FOUND)

    @property
    def is_ok(self) -> bool:
        return self.outcome is LookupOutcome.OK


class BaseNormLookup(ABC):
    """Abstract base class for psycholinguistic norm databases."""

    name: str = "base"

    def __init__(self, config: dict = None):
        self.config = config or {}

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """Check if the backend's requirements are installed."""
        pass

    @abstractmethod
    def contains(self, word: str) -> bool:
        """Whether the database has any entry for the word."""
        pass

    @abstractmethod
    def available_tags(self, word: str) -> Set[str]:
        """Grammatical-category tags that have an entry for the word."""
        pass

    @abstractmethod
    def fetch(self, word: str, tag: str, norm: str) -> LookupResult:
        """Fetch one norm value for the word read as the given category.

        Returns:
            ``LookupResult.ok(value)``; ``not_applicable`` when the entry
            exists but has no value for the norm; ``not_found`` when there is
            no such entry.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(available={self.is_available()})"
