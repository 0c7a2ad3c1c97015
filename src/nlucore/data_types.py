"""
Data structures shared by the classifier and the entity extractor.

This module defines the records that flow between components using
dataclasses for validation and better IDE support.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple


# Type aliases for better readability
FeatureVector = Sequence[float]
LocaleTexts = Dict[str, List[str]]


@dataclass
class Observation:
    """
    One training example for a classifier.

    Attributes:
        features: Feature vector (copied into a tuple of floats)
        label: Label the features belong to
    """
    features: Tuple[float, ...]
    label: str

    def __post_init__(self):
        """Normalize features and validate the label."""
        if not isinstance(self.label, str):
            raise TypeError(f"Observation label must be str, got {type(self.label)}")
        self.features = tuple(float(value) for value in self.features)

    def __len__(self) -> int:
        return len(self.features)


@dataclass
class Classification:
    """
    A label with its probability.

    Attributes:
        label: Label name
        value: Probability (0.0 to 1.0)
    """
    label: str
    value: float

    def __post_init__(self):
        """Validate probability range."""
        if not 0.0 <= self.value <= 1.0:
            raise ValueError(f"Classification value must be between 0 and 1, got {self.value}")

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value}


@dataclass
class EntityOption:
    """
    One option (canonical value) of a named entity.

    Attributes:
        name: Option name, unique within its entity
        texts: Surface forms per locale code, in registration order
    """
    name: str
    texts: LocaleTexts = field(default_factory=dict)

    def get_texts(self, locale: str) -> List[str]:
        """Surface forms registered for a locale (empty list if none)."""
        return self.texts.get(locale, [])


@dataclass
class NamedEntity:
    """
    A named entity and its ordered options.

    Attributes:
        name: Entity name, unique within a registry
        options: Options in creation order
    """
    name: str
    options: List[EntityOption] = field(default_factory=list)


@dataclass
class EntityOccurrence:
    """
    A fuzzy match of a registered surface form inside an utterance.

    Offsets are character offsets with an exclusive end, so
    ``utterance[start:end] == utterance_text``.

    Attributes:
        start: Offset of the first matched character
        end: Offset one past the last matched character
        levenshtein: Edit distance between source_text and utterance_text
        accuracy: 1 - levenshtein / max(len(source_text), len(utterance_text))
        entity: Owning entity name
        option: Owning option name
        source_text: Registered surface form that matched
        utterance_text: Substring of the utterance that was matched
    """
    start: int
    end: int
    levenshtein: int
    accuracy: float
    entity: str
    option: str
    source_text: str
    utterance_text: str

    def __post_init__(self):
        """Validate offsets and scores."""
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid occurrence span: start={self.start}, end={self.end}")
        if self.levenshtein < 0:
            raise ValueError(f"levenshtein must be non-negative, got {self.levenshtein}")
        if not 0.0 <= self.accuracy <= 1.0:
            raise ValueError(f"accuracy must be between 0 and 1, got {self.accuracy}")

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "EntityOccurrence") -> bool:
        """Check whether two occurrences share at least one character."""
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary used on the wire."""
        return {
            "start": self.start,
            "end": self.end,
            "levenshtein": self.levenshtein,
            "accuracy": self.accuracy,
            "entity": self.entity,
            "option": self.option,
            "sourceText": self.source_text,
            "utteranceText": self.utterance_text,
        }
