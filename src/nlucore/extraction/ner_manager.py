"""
Named entity manager.

One object holding an entity registry and the fuzzy extractor that scans
it. Registry operations and find_entities() are exposed directly so
callers do not need to wire the two together.
"""
import logging
from typing import Any, Dict, List, Optional

from nlucore.config import config
from nlucore.data_types import EntityOccurrence, EntityOption, NamedEntity
from nlucore.extraction.fuzzy_extractor import FuzzyExtractor
from nlucore.extraction.registry import EntityRegistry, StrOrList
from nlucore.extraction.similar_search import SimilarSearch
from nlucore.nlp import LocaleResolver

logger = logging.getLogger(__name__)

SETTING_KEYS = ("threshold", "window_tolerance")


class NerManager:
    """
    Registry plus fuzzy extractor behind a single surface.

    Example:
        >>> manager = NerManager({"threshold": 0.8})
        >>> manager.add_named_entity_text("hero", "spiderman", "en", ["Spiderman", "Spider-man"])
        >>> [o.option for o in manager.find_entities("I saw spederman", "en")]
        ['spiderman']
    """

    def __init__(self, settings: Optional[Dict[str, Any]] = None,
                 locale_resolver: Optional[LocaleResolver] = None):
        """
        Args:
            settings: Optional overrides; recognized keys are threshold
                      and window_tolerance
            locale_resolver: Tokenizer/stemmer selection for find_entities()
        """
        self.settings = dict(settings or {})
        unknown = sorted(set(self.settings) - set(SETTING_KEYS))
        if unknown:
            logger.warning("Ignoring unknown NER settings", extra={'unknown_settings': unknown})

        self.registry = EntityRegistry()
        self.extractor = FuzzyExtractor(
            self.registry,
            threshold=self.settings.get("threshold", config.NER_THRESHOLD),
            locale_resolver=locale_resolver,
            window_tolerance=self.settings.get("window_tolerance"),
        )

    @property
    def threshold(self) -> float:
        """Accuracy threshold of the extractor; assignments are validated there."""
        return self.extractor.threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self.extractor.threshold = value

    @property
    def similar(self) -> SimilarSearch:
        return self.extractor.similar

    @property
    def locale_resolver(self) -> LocaleResolver:
        return self.extractor.locale_resolver

    @property
    def named_entities(self) -> List[NamedEntity]:
        return self.registry.named_entities

    # Registry surface

    def add_named_entity(self, name: str) -> NamedEntity:
        return self.registry.add_named_entity(name)

    def get_named_entity(self, name: str, force_create: bool = False) -> Optional[NamedEntity]:
        return self.registry.get_named_entity(name, force_create)

    def remove_named_entity(self, name: str) -> None:
        self.registry.remove_named_entity(name)

    def get_options_position_from_entity(self, entity: NamedEntity, option_name: str) -> int:
        return self.registry.get_options_position_from_entity(entity, option_name)

    def get_option_from_entity(self, entity: NamedEntity, option_name: str) -> Optional[EntityOption]:
        return self.registry.get_option_from_entity(entity, option_name)

    def add_named_entity_option(self, entity_name: str, option_name: str) -> EntityOption:
        return self.registry.add_named_entity_option(entity_name, option_name)

    def get_named_entity_option(self, entity_name: str, option_name: str,
                                force_create: bool = False) -> Optional[EntityOption]:
        return self.registry.get_named_entity_option(entity_name, option_name, force_create)

    def remove_named_entity_option(self, entity_name: str, option_name: str) -> None:
        self.registry.remove_named_entity_option(entity_name, option_name)

    def add_named_entity_text(self, entity_name: str, option_name: str,
                              locales: StrOrList, texts: StrOrList) -> None:
        self.registry.add_named_entity_text(entity_name, option_name, locales, texts)

    def remove_named_entity_text(self, entity_name: str, option_name: str,
                                 locales: StrOrList, texts: StrOrList) -> None:
        self.registry.remove_named_entity_text(entity_name, option_name, locales, texts)

    def get_entities_from_utterance(self, utterance: str) -> List[str]:
        return self.registry.get_entities_from_utterance(utterance)

    # Extraction

    def find_entities(self, utterance: str, locale: str) -> List[EntityOccurrence]:
        """Fuzzy occurrences of registered entities, ordered by start."""
        return self.extractor.find_entities(utterance, locale)

    def __repr__(self):
        return f"<NerManager entities={len(self.registry)} threshold={self.threshold}>"
