"""
Named entity extraction.

A registry of entities, options and localized surface forms, and a fuzzy
extractor that finds approximate occurrences of them in an utterance.
"""

from nlucore.extraction.fuzzy_extractor import FuzzyExtractor, resolve_overlaps
from nlucore.extraction.ner_manager import NerManager
from nlucore.extraction.registry import EntityRegistry
from nlucore.extraction.similar_search import SimilarSearch, SubstringMatch, compute_accuracy

__all__ = [
    "EntityRegistry",
    "FuzzyExtractor",
    "NerManager",
    "SimilarSearch",
    "SubstringMatch",
    "compute_accuracy",
    "resolve_overlaps",
]
