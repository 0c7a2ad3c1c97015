"""Classifier base class."""

from abc import ABC, abstractmethod
from typing import List, Optional

from nlucore.data_types import Classification, FeatureVector


class Classifier(ABC):
    """
    Common interface shared by observation-trained classifiers.

    Subclasses collect observations with add_observation(), derive their
    model in train() and rank labels in get_classifications().
    """

    @abstractmethod
    def add_observation(self, features: FeatureVector, label: str) -> None:
        """Queue one labelled feature vector for the next train() call."""

    @abstractmethod
    def train(self) -> None:
        """Rebuild the model from every observation added so far."""

    @abstractmethod
    def get_classifications(self, features: FeatureVector) -> List[Classification]:
        """Return every known label with its probability, best first."""

    def get_best_classification(self, features: FeatureVector) -> Optional[Classification]:
        """Return the most probable label, or None when the model knows no labels."""
        classifications = self.get_classifications(features)
        if not classifications:
            return None
        return classifications[0]
