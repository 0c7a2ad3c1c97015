"""
Unit tests for nlucore.extraction.ner_manager.

The manager delegates to EntityRegistry and FuzzyExtractor; these tests
check the wiring and the settings handling.
"""
import logging

import pytest

from nlucore.extraction import EntityRegistry, FuzzyExtractor, NerManager, SimilarSearch
from nlucore.nlp import LocaleResolver


class TestConstructor:
    """Tests for NerManager construction."""

    def test_initialize_properties(self):
        """Test default threshold and collaborators."""
        manager = NerManager()
        assert manager.threshold == 0.5
        assert manager.named_entities == []
        assert isinstance(manager.similar, SimilarSearch)
        assert isinstance(manager.registry, EntityRegistry)
        assert isinstance(manager.extractor, FuzzyExtractor)

    def test_threshold_setting(self):
        """Test the threshold setting reaches the extractor."""
        manager = NerManager({"threshold": 0.6})
        assert manager.threshold == 0.6
        assert manager.extractor.threshold == 0.6

    def test_window_tolerance_setting(self):
        """Test the window tolerance setting reaches the search."""
        manager = NerManager({"window_tolerance": 1})
        assert manager.similar.window_tolerance == 1

    def test_locale_resolver(self):
        """Test a supplied resolver is used."""
        resolver = LocaleResolver({"en": True})
        manager = NerManager(locale_resolver=resolver)
        assert manager.locale_resolver is resolver

    def test_unknown_setting_warns(self, caplog):
        """Test unknown settings are logged."""
        with caplog.at_level(logging.WARNING, logger="nlucore.extraction.ner_manager"):
            NerManager({"language": "en"})
        assert "Ignoring unknown NER settings" in caplog.text


class TestRegistrySurface:
    """Tests for delegated registry operations."""

    def test_entity_round_trip(self):
        """Test add, get and remove go through the registry."""
        manager = NerManager()
        entity = manager.add_named_entity("entity1")
        assert manager.add_named_entity("entity1") is entity
        assert manager.get_named_entity("entity1") is entity
        assert manager.get_named_entity("entity2") is None
        assert manager.get_named_entity("entity2", True).name == "entity2"
        manager.remove_named_entity("entity1")
        assert manager.get_named_entity("entity1") is None
        assert [e.name for e in manager.named_entities] == ["entity2"]

    def test_option_round_trip(self):
        """Test option operations through the manager."""
        manager = NerManager()
        option = manager.add_named_entity_option("entity1", "option1_1")
        entity = manager.get_named_entity("entity1")
        assert manager.get_named_entity_option("entity1", "option1_1") is option
        assert manager.get_options_position_from_entity(entity, "option1_1") == 0
        assert manager.get_option_from_entity(entity, "option1_1") is option
        assert manager.get_named_entity_option("entity1", "option1_2") is None
        assert manager.get_named_entity_option("entity1", "option1_2", True) is not None
        manager.remove_named_entity_option("entity1", "option1_1")
        assert manager.get_option_from_entity(entity, "option1_1") is None

    def test_text_round_trip(self):
        """Test text operations through the manager."""
        manager = NerManager()
        manager.add_named_entity_text("entity1", "option1", ["en", "es"], ["Something", "Anything"])
        manager.remove_named_entity_text("entity1", "option1", "es", "Something")
        option = manager.get_named_entity_option("entity1", "option1")
        assert option.texts == {"en": ["Something", "Anything"], "es": ["Anything"]}

    def test_entities_from_utterance(self):
        """Test the template scanner through the manager."""
        manager = NerManager()
        manager.add_named_entity("entity1")
        manager.add_named_entity("entity3")
        assert manager.get_entities_from_utterance("This is %entity1% from %entity3% yeah") == [
            "entity1", "entity3",
        ]


class TestFindEntities:
    """Tests for find_entities() through the manager."""

    @pytest.fixture
    def heroes(self):
        def build(settings=None):
            manager = NerManager(settings)
            manager.add_named_entity_text("hero", "spiderman", ["en"], ["Spiderman", "Spider-man"])
            return manager
        return build

    def test_find_entity(self, heroes):
        """Test an exact match through the manager."""
        entities = heroes().find_entities("I saw spiderman in the city", "en")
        assert len(entities) == 1
        assert entities[0].to_dict() == {
            "start": 6,
            "end": 15,
            "levenshtein": 0,
            "accuracy": 1,
            "entity": "hero",
            "option": "spiderman",
            "sourceText": "Spiderman",
            "utteranceText": "spiderman",
        }

    def test_threshold_gating(self, heroes):
        """Test the configured threshold filters weak matches."""
        manager = heroes({"threshold": 0.8})
        manager.add_named_entity_text("hero", "thor", ["en"], ["Thor"])
        manager.add_named_entity_text("hero", "iron man", ["en"], ["iron man", "iron-man"])
        found = manager.find_entities("I saw spederman in the city", "en")
        assert [(o.utterance_text, o.levenshtein) for o in found] == [("spederman", 1)]
        assert manager.find_entities("I saw spererman in the city", "en") == []

    def test_repr(self, heroes):
        """Test the representation mentions the entity count."""
        assert repr(heroes()) == "<NerManager entities=1 threshold=0.5>"

    def test_threshold_assignment_reaches_extractor(self, heroes):
        """Test assigning the threshold after construction changes the scan."""
        manager = heroes()
        assert len(manager.find_entities("I saw spederman in the city", "en")) == 1

        manager.threshold = 0.95
        assert manager.extractor.threshold == 0.95
        assert manager.find_entities("I saw spederman in the city", "en") == []
        assert repr(manager) == "<NerManager entities=1 threshold=0.95>"

    def test_invalid_threshold_assignment(self, heroes):
        """Test out-of-range assignments are rejected and leave the threshold alone."""
        manager = heroes()
        with pytest.raises(ValueError, match="threshold must be between 0 and 1"):
            manager.threshold = 1.5
        assert manager.threshold == 0.5

    def test_form_inside_compound(self):
        """Test a German compound is matched through the manager."""
        manager = NerManager({"threshold": 0.8})
        manager.add_named_entity_text("food", "pizza", "de", "Pizza")
        found = manager.find_entities("Ich möchte eine Salamipizza", "de")
        assert [(o.start, o.end, o.utterance_text) for o in found] == [(22, 27, "pizza")]
