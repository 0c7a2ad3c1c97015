"""
nlucore - statistical core of a natural-language-understanding toolkit

This package provides:
- Typed records shared by every component (data_types.py)
- Softmax logistic regression intent classifier (classification/)
- Entity registry and fuzzy named entity extraction (extraction/)
- Locale-aware tokenizer/stemmer selection (nlp/)
"""

# Export configuration
from nlucore.config import config, NluConfig

# Export core types
from nlucore.data_types import (
    Classification,
    EntityOccurrence,
    EntityOption,
    NamedEntity,
    Observation,
    FeatureVector,
)

from nlucore.errors import ContractViolation

from nlucore.classification import LogisticRegressionClassifier
from nlucore.extraction import (
    EntityRegistry,
    FuzzyExtractor,
    NerManager,
    SimilarSearch,
)
from nlucore.nlp import LocaleResolver
from nlucore.logging_config import setup_logging

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "config",
    "NluConfig",

    # Data structures
    "Classification",
    "EntityOccurrence",
    "EntityOption",
    "NamedEntity",
    "Observation",
    "FeatureVector",

    # Errors
    "ContractViolation",

    # Components
    "LogisticRegressionClassifier",
    "EntityRegistry",
    "FuzzyExtractor",
    "NerManager",
    "SimilarSearch",
    "LocaleResolver",

    "setup_logging",
]
