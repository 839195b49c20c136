import logging
from typing import Dict, Mapping, Optional

from .analyzers.dictionary import CategoryCounts
from .analyzers.surface import SurfaceFeatures, percent
from .schema import DIC_FEATURE, NUMBERS_CATEGORY, FeatureNaming

logger = logging.getLogger(__name__)


class FeatureAssembler:
    """
    Merges category, surface and norm features into one ordered vector.

    Output order: surface features, dictionary categories in file order
    followed by DIC, then the norms. Category names are shortened through
    the naming table, topic categories are removed and, for single documents,
    length-dependent counts are removed too.
    """

    def __init__(self, naming: Optional[FeatureNaming] = None):
        self.naming = naming or FeatureNaming()

    def canonicalize(self, features: Mapping[str, float]) -> Dict[str, float]:
        """Rename features to their short form, keeping the first position."""
        renamed: Dict[str, float] = {}
        for name, value in features.items():
            renamed[self.naming.canonical(name)] = value
        return renamed

    def assemble(
        self,
        category_counts: CategoryCounts,
        surface: SurfaceFeatures,
        norm_averages: Mapping[str, float],
        relative_only: bool = True,
    ) -> Dict[str, float]:
        n_words = surface.word_count
        raw: Dict[str, float] = dict(surface.values)
        for category, count in category_counts.counts.items():
            raw[category] = percent(count, n_words)
        raw[DIC_FEATURE] = percent(category_counts.matched_count, n_words)
        # numeric tokens complement the dictionary's own number words
        raw[NUMBERS_CATEGORY] = raw.get(NUMBERS_CATEGORY, 0.0) + surface.numeric_ratio

        features = self.canonicalize(raw)
        for name in self.naming.domain_dependent:
            features.pop(name, None)
        if relative_only:
            for name in self.naming.absolute:
                features.pop(name, None)
        logger.debug(f"LIWC features computed: {len(features)}")

        features.update(norm_averages)
        logger.debug(f"MRC features computed: {len(norm_averages)}")
        return features
