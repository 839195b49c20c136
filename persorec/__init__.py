"""LIWC and MRC psycholinguistic feature extraction for personality recognition."""

__version__ = "0.1.0"
