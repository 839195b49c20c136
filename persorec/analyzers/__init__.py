from .base import TokenizedDocument, AnalyzedDocument
from .tokenizer import TextTokenizer
from .dictionary import CategoryDictionary, CategoryPattern, CategoryCounts
from .surface import SurfaceFeatureExtractor, SurfaceFeatures
from .norms import NormLookupAggregator

__all__ = [
    "TokenizedDocument",
    "AnalyzedDocument",
    "TextTokenizer",
    "CategoryDictionary",
    "CategoryPattern",
    "CategoryCounts",
    "SurfaceFeatureExtractor",
    "SurfaceFeatures",
    "NormLookupAggregator",
]
