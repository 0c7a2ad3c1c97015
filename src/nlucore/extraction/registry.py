"""
Named entity registry.

Stores named entities, their options and the localized surface forms
(texts) of each option:

    entity "hero"
      option "spiderman": {"en": ["Spiderman", "Spider-man"]}
      option "thor":      {"en": ["Thor"]}

Lookups of missing entries return None (or -1 for positions) instead of
raising; mutators create missing entities and options on the way.
"""
import logging
import re
from typing import Dict, Iterable, Iterator, List, Optional, Union

from nlucore.data_types import EntityOption, NamedEntity

logger = logging.getLogger(__name__)

# Placeholder markers in template utterances: "I want %food% with %drink%"
TEMPLATE_PATTERN = re.compile(r"%([^%\s]+)%")

StrOrList = Union[str, Iterable[str]]


def as_list(value: StrOrList) -> List[str]:
    """Accept a single string or an iterable of strings."""
    if isinstance(value, str):
        return [value]
    return list(value)


class EntityRegistry:
    """
    CRUD store of named entities, options and per-locale texts.

    Example:
        >>> registry = EntityRegistry()
        >>> registry.add_named_entity_text("hero", "spiderman", "en", ["Spiderman", "Spider-man"])
        >>> registry.get_named_entity_option("hero", "spiderman").texts
        {'en': ['Spiderman', 'Spider-man']}
    """

    def __init__(self):
        self._entities: Dict[str, NamedEntity] = {}

    # -----------------------------------------------------
    # Entities
    # -----------------------------------------------------

    def add_named_entity(self, name: str) -> NamedEntity:
        """Create an entity, or return the existing one unchanged."""
        entity = self._entities.get(name)
        if entity is None:
            entity = NamedEntity(name=name)
            self._entities[name] = entity
            logger.debug("Named entity added", extra={'entity': name})
        return entity

    def get_named_entity(self, name: str, force_create: bool = False) -> Optional[NamedEntity]:
        """Return an entity; create it only when force_create is set."""
        entity = self._entities.get(name)
        if entity is None and force_create:
            entity = self.add_named_entity(name)
        return entity

    def remove_named_entity(self, name: str) -> None:
        """Delete an entity; no-op when it does not exist."""
        if self._entities.pop(name, None) is not None:
            logger.debug("Named entity removed", extra={'entity': name})

    @property
    def named_entities(self) -> List[NamedEntity]:
        """Entities in creation order."""
        return list(self._entities.values())

    # -----------------------------------------------------
    # Options
    # -----------------------------------------------------

    @staticmethod
    def get_options_position_from_entity(entity: NamedEntity, option_name: str) -> int:
        """Index of an option inside an entity, -1 if missing."""
        for position, option in enumerate(entity.options):
            if option.name == option_name:
                return position
        return -1

    def get_option_from_entity(self, entity: NamedEntity, option_name: str) -> Optional[EntityOption]:
        """Option of an entity by name, None if missing."""
        position = self.get_options_position_from_entity(entity, option_name)
        if position < 0:
            return None
        return entity.options[position]

    def add_named_entity_option(self, entity_name: str, option_name: str) -> EntityOption:
        """Create entity and option as needed; return the option."""
        entity = self.add_named_entity(entity_name)
        option = self.get_option_from_entity(entity, option_name)
        if option is None:
            option = EntityOption(name=option_name)
            entity.options.append(option)
        return option

    def get_named_entity_option(self, entity_name: str, option_name: str,
                                force_create: bool = False) -> Optional[EntityOption]:
        """Return an option; create entity and option only when force_create is set."""
        entity = self.get_named_entity(entity_name, force_create)
        if entity is None:
            return None
        option = self.get_option_from_entity(entity, option_name)
        if option is None and force_create:
            option = self.add_named_entity_option(entity_name, option_name)
        return option

    def remove_named_entity_option(self, entity_name: str, option_name: str) -> None:
        """Delete an option; no-op when the entity or option does not exist."""
        entity = self.get_named_entity(entity_name)
        if entity is None:
            return
        position = self.get_options_position_from_entity(entity, option_name)
        if position >= 0:
            del entity.options[position]

    # -----------------------------------------------------
    # Texts
    # -----------------------------------------------------

    def add_named_entity_text(self, entity_name: str, option_name: str,
                              locales: StrOrList, texts: StrOrList) -> None:
        """
        Append every text to every locale of an option.

        Missing entity, option and locale buckets are created. Texts are
        appended in order and duplicates are kept.
        """
        option = self.add_named_entity_option(entity_name, option_name)
        texts = as_list(texts)
        for locale in as_list(locales):
            option.texts.setdefault(locale, []).extend(texts)

    def remove_named_entity_text(self, entity_name: str, option_name: str,
                                 locales: StrOrList, texts: StrOrList) -> None:
        """
        Remove the first occurrence of every text from every locale of an option.

        Anything missing is ignored. An emptied locale keeps its (empty) list.
        """
        option = self.get_named_entity_option(entity_name, option_name)
        if option is None:
            return
        texts = as_list(texts)
        for locale in as_list(locales):
            bucket = option.texts.get(locale)
            if bucket is None:
                continue
            for text in texts:
                if text in bucket:
                    bucket.remove(text)

    # -----------------------------------------------------
    # Templates
    # -----------------------------------------------------

    def get_entities_from_utterance(self, utterance: str) -> List[str]:
        """
        Registered entity names referenced as %name% placeholders.

        Names are returned once each, in order of first appearance;
        placeholders naming unknown entities are skipped.

        Example:
            >>> registry = EntityRegistry()
            >>> _ = registry.add_named_entity("entity1")
            >>> registry.get_entities_from_utterance("This is %entity1% with %entity4%")
            ['entity1']
        """
        found: List[str] = []
        for match in TEMPLATE_PATTERN.finditer(utterance):
            name = match.group(1)
            if name in self._entities and name not in found:
                found.append(name)
        return found

    # -----------------------------------------------------
    # Container protocol
    # -----------------------------------------------------

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[NamedEntity]:
        return iter(list(self._entities.values()))
