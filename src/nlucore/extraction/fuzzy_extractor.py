"""
Fuzzy named entity extraction.

For each surface form registered under the requested locale, the best
character window of the utterance is scored with the Levenshtein
distance. Windows scoring at least the accuracy threshold become
candidates; overlapping candidates are then resolved left to right so the
result never contains two occurrences sharing a character.
"""
import logging
from typing import Any, Dict, List, Optional

from nlucore.config import config
from nlucore.data_types import EntityOccurrence
from nlucore.extraction.registry import EntityRegistry
from nlucore.extraction.similar_search import SimilarSearch
from nlucore.logging_config import log_function_call
from nlucore.nlp import LocaleResolver, token_spans
from nlucore.perf import StageTimer

logger = logging.getLogger(__name__)


def resolve_overlaps(candidates: List[EntityOccurrence]) -> List[EntityOccurrence]:
    """
    Keep a non-overlapping subset of occurrences ordered by start.

    Candidates are visited by ascending start; for an equal start the more
    accurate, then the longer, occurrence goes first. A candidate is kept
    only if it does not overlap anything kept before it.
    """
    ordered = sorted(
        candidates,
        key=lambda occurrence: (occurrence.start, -occurrence.accuracy, -occurrence.length),
    )
    kept: List[EntityOccurrence] = []
    for occurrence in ordered:
        if any(occurrence.overlaps(previous) for previous in kept):
            continue
        kept.append(occurrence)
    return kept


class FuzzyExtractor:
    """
    Finds approximate occurrences of registered entities in an utterance.

    The registry is read fresh on every call, so entities added after the
    extractor was created are picked up immediately.

    Example:
        >>> registry = EntityRegistry()
        >>> registry.add_named_entity_text("hero", "spiderman", "en", "Spiderman")
        >>> extractor = FuzzyExtractor(registry, threshold=0.8)
        >>> [o.utterance_text for o in extractor.find_entities("I saw spederman", "en")]
        ['spederman']
    """

    def __init__(
        self,
        registry: EntityRegistry,
        threshold: Optional[float] = None,
        locale_resolver: Optional[LocaleResolver] = None,
        window_tolerance: Optional[int] = None,
    ):
        """
        Args:
            registry: Entities to look for
            threshold: Minimum accuracy (0-1); defaults to config.NER_THRESHOLD
            locale_resolver: Supplies the tokenizer for a locale
            window_tolerance: Allowed window length difference in characters
        """
        self.registry = registry
        self.threshold = config.NER_THRESHOLD if threshold is None else threshold
        self.locale_resolver = locale_resolver or LocaleResolver()
        self.similar = SimilarSearch(window_tolerance)
        self.trace: Dict[str, Any] = {}

    @property
    def threshold(self) -> float:
        """Minimum accuracy a window needs to become a candidate."""
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        value = float(value)
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"threshold must be between 0 and 1, got {value}")
        self._threshold = value

    def get_candidates(self, utterance: str, locale: str) -> List[EntityOccurrence]:
        """
        Best qualifying window for every surface form of the locale.

        Returns:
            Occurrences that pass the threshold, possibly overlapping
        """
        tokenizer = self.locale_resolver.get_tokenizer(locale)
        spans = token_spans(utterance, tokenizer.tokenize(utterance))

        candidates: List[EntityOccurrence] = []
        for entity in self.registry.named_entities:
            for option in entity.options:
                for text in option.get_texts(locale):
                    match = self.similar.get_best_substring(utterance, text, spans)
                    if match is None or match.accuracy < self.threshold:
                        continue
                    candidates.append(EntityOccurrence(
                        start=match.start,
                        end=match.end,
                        levenshtein=match.levenshtein,
                        accuracy=match.accuracy,
                        entity=entity.name,
                        option=option.name,
                        source_text=text,
                        utterance_text=utterance[match.start:match.end],
                    ))
        return candidates

    @log_function_call()
    def find_entities(self, utterance: str, locale: str) -> List[EntityOccurrence]:
        """
        Recognize registered entities inside an utterance.

        Args:
            utterance: Text to scan
            locale: Locale whose surface forms are used; unknown locales
                    simply have no texts and use the default tokenizer

        Returns:
            Non-overlapping occurrences ordered by ascending start
        """
        if not utterance or not len(self.registry):
            return []

        self.trace = {}
        budget = None if config.LOG_PERFORMANCE_METRICS else float("inf")
        with StageTimer(self.trace, "find_entities", budget_ms=budget,
                        context={'locale': locale}):
            candidates = self.get_candidates(utterance, locale)
            occurrences = resolve_overlaps(candidates)

        logger.debug(
            "Entities found",
            extra={
                'locale': locale,
                'candidates_count': len(candidates),
                'occurrences_count': len(occurrences),
            }
        )
        return occurrences
