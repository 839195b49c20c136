"""
Fixed feature names shared by the extraction engine and the model layer.

The category shortcut table maps the long category names found in LIWC
category files to the short attribute names the pretrained models expect.
Everything here is immutable; the assembler receives it through
``FeatureNaming`` rather than reading module state.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Tuple

SURFACE_FEATURES: Tuple[str, ...] = (
    "WC",
    "WPS",
    "UNIQUE",
    "SIXLTR",
    "ABBREVIATIONS",
    "EMOTICONS",
    "QMARKS",
    "PERIOD",
    "COMMA",
    "COLON",
    "SEMIC",
    "QMARK",
    "EXCLAM",
    "DASH",
    "QUOTE",
    "APOSTRO",
    "PARENTH",
    "OTHERP",
    "ALLPCT",
)

# Psycholinguistic norms, in output order.
NORM_NAMES: Tuple[str, ...] = (
    "NLET",
    "NPHON",
    "NSYL",
    "K_F_FREQ",
    "K_F_NCATS",
    "K_F_NSAMP",
    "T_L_FREQ",
    "BROWN_FREQ",
    "FAM",
    "CONC",
    "IMAG",
    "MEANC",
    "MEANP",
    "AOA",
)

# First tag present in a word's tag set wins.
POS_PRIORITY: Tuple[str, ...] = (
    "NOUN",
    "VERB",
    "ADJECTIVE",
    "ADVERB",
    "PAST_PARTICIPLE",
    "PREPOSITION",
    "CONJUNCTION",
    "PRONOUN",
    "INTERJECTION",
    "OTHER",
)

DIC_FEATURE = "DIC"
NUMBERS_CATEGORY = "NUMBERS"

CATEGORY_SHORTCUTS: Mapping[str, str] = MappingProxyType(
    {
        "LINGUISTIC": "LINGUISTIC",
        "PRONOUN": "PRONOUN",
        "I": "I",
        "WE": "WE",
        "SELF": "SELF",
        "YOU": "YOU",
        "OTHER": "OTHER",
        "NEGATIONS": "NEGATE",
        "ASSENTS": "ASSENT",
        "ARTICLES": "ARTICLE",
        "PREPOSITIONS": "PREPS",
        "NUMBERS": "NUMBER",
        "PSYCHOLOGICAL PROCESS": "PSYCHOLOGICAL PROCESS",
        "AFFECTIVE PROCESS": "AFFECT",
        "POSITIVE EMOTION": "POSEMO",
        "POSITIVE FEELING": "POSFEEL",
        "OPTIMISM": "OPTIM",
        "NEGATIVE EMOTION": "NEGEMO",
        "ANXIETY": "ANX",
        "ANGER": "ANGER",
        "SADNESS": "SAD",
        "COGNITIVE PROCESS": "COGMECH",
        "CAUSATION": "CAUSE",
        "INSIGHT": "INSIGHT",
        "DISCREPANCY": "DISCREP",
        "INHIBITION": "INHIB",
        "TENTATIVE": "TENTAT",
        "CERTAINTY": "CERTAIN",
        "SENSORY PROCESS": "SENSES",
        "SEEING": "SEE",
        "HEARING": "HEAR",
        "FEELING": "FEEL",
        "SOCIAL PROCESS": "SOCIAL",
        "COMMUNICATION": "COMM",
        "REFERENCE PEOPLE": "OTHREF",
        "FRIENDS": "FRIENDS",
        "FAMILY": "FAMILY",
        "HUMANS": "HUMANS",
        "RELATIVITY": "RELATIVITY",
        "TIME": "TIME",
        "PAST": "PAST",
        "PRESENT": "PRESENT",
        "FUTURE": "FUTURE",
        "SPACE": "SPACE",
        "UP": "UP",
        "DOWN": "DOWN",
        "INCLUSIVE": "INCL",
        "EXCLUSIVE": "EXCL",
        "MOTION": "MOTION",
        "PERSONAL PROCESS": "PERSONAL PROCESS",
        "OCCUPATION": "OCCUP",
        "SCHOOL": "SCHOOL",
        "JOB OR WORK": "JOB",
        "ACHIEVEMENT": "ACHIEVE",
        "LEISURE ACTIVITY": "LEISURE",
        "HOME": "HOME",
        "SPORTS": "SPORTS",
        "TV OR MOVIE": "TV",
        "MUSIC": "MUSIC",
        "MONEY": "MONEY",
        "METAPHYSICAL": "METAPH",
        "RELIGION": "RELIG",
        "DEATH AND DYING": "DEATH",
        "PHYSICAL STATES": "PHYSCAL",
        "BODY STATES": "BODY",
        "SEXUALITY": "SEXUAL",
        "EATING": "EATING",
        "SLEEPING": "SLEEP",
        "GROOMING": "GROOM",
        "EXPERIMENTAL DIMENSION": "EXPERIMENTAL DIMENSION",
        "SWEAR WORDS": "SWEAR",
        "NONFLUENCIES": "NONFL",
        "FILLERS": "FILLERS",
    }
)

# Topic categories that no model uses.
DOMAIN_DEPENDENT_FEATURES: FrozenSet[str] = frozenset(
    {
        "FRIENDS",
        "FAMILY",
        "OCCUP",
        "SCHOOL",
        "JOB",
        "LEISURE",
        "HOME",
        "SPORTS",
        "TV",
        "MUSIC",
        "MONEY",
        "METAPH",
        "DEATH",
        "PHYSCAL",
        "BODY",
        "EATING",
        "SLEEP",
        "GROOM",
    }
)

# Features that depend on document length.
ABSOLUTE_COUNT_FEATURES: FrozenSet[str] = frozenset({"WC"})

ATTRIBUTE_SCHEMA: Tuple[str, ...] = (
    "WC", "WPS", "UNIQUE", "SIXLTR", "ABBREVIATIONS", "EMOTICONS", "QMARKS",
    "PERIOD", "COMMA", "COLON", "SEMIC", "QMARK", "EXCLAM", "DASH", "QUOTE",
    "APOSTRO", "PARENTH", "OTHERP", "ALLPCT", "PRONOUN", "I", "WE", "SELF",
    "YOU", "OTHER", "NEGATE", "ASSENT", "ARTICLE", "PREPS", "NUMBER", "AFFECT",
    "POSEMO", "POSFEEL", "OPTIM", "NEGEMO", "ANX", "ANGER", "SAD", "COGMECH",
    "CAUSE", "INSIGHT", "DISCREP", "INHIB", "TENTAT", "CERTAIN", "SENSES",
    "SEE", "HEAR", "FEEL", "SOCIAL", "COMM", "OTHREF", "FRIENDS", "FAMILY",
    "HUMANS", "TIME", "PAST", "PRESENT", "FUTURE", "SPACE", "UP", "DOWN",
    "INCL", "EXCL", "MOTION", "OCCUP", "SCHOOL", "JOB", "ACHIEVE", "LEISURE",
    "HOME", "SPORTS", "TV", "MUSIC", "MONEY", "METAPH", "RELIG", "DEATH",
    "PHYSCAL", "BODY", "SEXUAL", "EATING", "SLEEP", "GROOM", "SWEAR", "NONFL",
    "FILLERS", "DIC",
) + NORM_NAMES


@dataclass(frozen=True)
class FeatureNaming:
    """Canonical naming and exclusion rules applied by the FeatureAssembler."""

    shortcuts: Mapping[str, str] = field(default_factory=lambda: CATEGORY_SHORTCUTS)
    domain_dependent: FrozenSet[str] = field(default_factory=lambda: DOMAIN_DEPENDENT_FEATURES)
    absolute: FrozenSet[str] = field(default_factory=lambda: ABSOLUTE_COUNT_FEATURES)

    @classmethod
    def build(
        cls,
        shortcuts: Mapping[str, str],
        domain_dependent: Iterable[str] = (),
        absolute: Iterable[str] = (),
    ) -> "FeatureNaming":
        return cls(
            shortcuts=MappingProxyType(dict(shortcuts)),
            domain_dependent=frozenset(domain_dependent),
            absolute=frozenset(absolute),
        )

    def canonical(self, name: str) -> str:
        """Short form of a category name; unknown names pass through."""
        return self.shortcuts.get(name, name)
