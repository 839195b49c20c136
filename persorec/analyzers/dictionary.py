import re
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Pattern, Tuple, Union

from ..errors import DictionaryLoadError

logger = logging.getLogger(__name__)

# One tab, then the category name.
_HEADER_RE = re.compile(r"\t[\w ]+")
# Two tabs, the word pattern, one space and a parenthesized integer.
_MEMBER_RE = re.compile(r"\t\t.+ \(\d+\)")
_WILDCARD = r"[\w']*"


def _member_regex(pattern: str) -> str:
    return r"\b" + re.escape(pattern).replace(r"\*", _WILDCARD) + r"\b"


@dataclass(frozen=True)
class CategoryPattern:
    """A named lexical category compiled into a single disjunctive regex."""

    name: str
    members: Tuple[str, ...]
    regex: Pattern = field(repr=False, compare=False)

    @classmethod
    def build(cls, name: str, members: Iterable[str]) -> "CategoryPattern":
        members = tuple(members)
        source = "(" + "|".join(_member_regex(m) for m in members) + ")"
        return cls(name=name, members=members, regex=re.compile(source, re.IGNORECASE))

    def find_all(self, token: str) -> List[str]:
        """
        Return every non-overlapping match in the case-folded token.

        Each search resumes at the end of the previous match, so a long token
        may contribute several matches. Zero-length matches are not counted.
        """
        return [m.group(0) for m in self.regex.finditer(token.lower()) if m.group(0)]


@dataclass
class CategoryCounts:
    counts: Dict[str, int]
    matched: List[bool]

    @property
    def matched_count(self) -> int:
        """Number of tokens that matched at least one category."""
        return sum(1 for flag in self.matched if flag)


class CategoryDictionary:
    """
    LIWC-style category dictionary.

    Loaded from a category-definition file in which each category header is
    a line with one leading tab and each member word is a line with two
    leading tabs followed by the word and a parenthesized number. Every
    category becomes one regular expression, the disjunction of its members,
    where a trailing ``*`` matches any run of word characters or apostrophes.

    The category order of the file is preserved and is visible in the
    extracted feature vectors.
    """

    def __init__(self, categories: Mapping[str, CategoryPattern]):
        self._categories = MappingProxyType(dict(categories))

    @classmethod
    def compile(cls, path: Union[str, Path]) -> "CategoryDictionary":
        path = Path(path)
        if not path.is_file():
            raise DictionaryLoadError(path, "file doesn't exist")
        try:
            with open(path, "r", encoding="utf-8") as f:
                dictionary = cls.from_lines(f, source=path)
        except UnicodeDecodeError as e:
            raise DictionaryLoadError(path, f"not valid UTF-8 ({e})") from e
        logger.info(
            f"LIWC dictionary loaded ({len(dictionary)} lexical categories) from {path}"
        )
        return dictionary

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], source: Optional[Union[str, Path]] = None
    ) -> "CategoryDictionary":
        categories: Dict[str, CategoryPattern] = {}
        current: Optional[str] = None
        members: List[str] = []
        word_count = 0

        def flush():
            if current is not None and members:
                categories[current] = CategoryPattern.build(current, members)

        for line in lines:
            line = line.rstrip("\r\n")
            if _HEADER_RE.fullmatch(line):
                flush()
                current = line.split("\t")[1]
                members = []
            elif _MEMBER_RE.fullmatch(line):
                if current is None:
                    logger.warning(f"Ignoring dictionary word before any category: {line.strip()}")
                    continue
                members.append(line.split()[0].lower())
                word_count += 1
        flush()

        if not categories:
            raise DictionaryLoadError(
                source or "<lines>", "no lexical categories in the expected format"
            )
        logger.debug(f"{word_count} words and {len(categories)} categories loaded")
        return cls(categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def __getitem__(self, name: str) -> CategoryPattern:
        return self._categories[name]

    @property
    def names(self) -> List[str]:
        return list(self._categories)

    def count_categories(self, tokens: List[str]) -> CategoryCounts:
        """Count category matches over tokens and flag in-dictionary tokens."""
        matched = [False] * len(tokens)
        counts: Dict[str, int] = {}
        for name, category in self._categories.items():
            total = 0
            for i, token in enumerate(tokens):
                hits = len(category.find_all(token))
                if hits:
                    total += hits
                    matched[i] = True
            counts[name] = total
        return CategoryCounts(counts=counts, matched=matched)
