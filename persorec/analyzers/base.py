from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class TokenizedDocument:
    source_id: str
    raw_text: str
    tokens: List[str]
    sentences: List[str]

    @property
    def words(self) -> List[str]:
        """Tokens without the empty placeholder left by word-less text."""
        return [t for t in self.tokens if t]

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)


@dataclass
class AnalyzedDocument:
    tokenized: TokenizedDocument
    features: Dict[str, float] = field(default_factory=dict)
    scores: Dict[str, float] = field(default_factory=dict)
