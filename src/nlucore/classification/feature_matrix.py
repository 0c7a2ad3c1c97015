"""
Observation storage for classifiers.

FeatureMatrix accumulates (features, label) observations and lazily turns
them into the numeric arrays needed for training: the design matrix X
(one row per observation) and the one-hot target matrix Y (one column per
label, in LabelSet order).
"""
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from nlucore.data_types import FeatureVector, Observation
from nlucore.errors import ContractViolation


class LabelSet:
    """
    Ordered set of labels.

    Labels keep their first-seen order, which is also the row order of a
    trained theta matrix.
    """

    def __init__(self, labels: Optional[Iterable[str]] = None):
        self._labels: List[str] = []
        self._index: Dict[str, int] = {}
        for label in labels or ():
            self.add(label)

    def add(self, label: str) -> int:
        """Add a label if missing and return its position."""
        position = self._index.get(label)
        if position is None:
            position = len(self._labels)
            self._labels.append(label)
            self._index[label] = position
        return position

    def index_of(self, label: str) -> int:
        """Position of a label, -1 if unknown."""
        return self._index.get(label, -1)

    def one_hot(self, labels: Sequence[str]) -> np.ndarray:
        """
        Encode labels as one-hot rows.

        Args:
            labels: Labels to encode, all of them already in the set

        Returns:
            Array of shape (len(labels), len(self))
        """
        encoded = np.zeros((len(labels), len(self._labels)))
        for row, label in enumerate(labels):
            encoded[row, self._index[label]] = 1.0
        return encoded

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __contains__(self, label: object) -> bool:
        return label in self._index


class FeatureMatrix:
    """
    Accumulates observations and builds training arrays on demand.

    Arrays are cached until the next observation is added, so repeated
    train() calls without new data do not rebuild them.

    Example:
        >>> matrix = FeatureMatrix()
        >>> matrix.add([1, 0, 1], "greet")
        >>> matrix.add([0, 1, 0], "bye")
        >>> label_set, X, Y = matrix.build()
        >>> label_set.labels
        ('greet', 'bye')
    """

    def __init__(self):
        self._observations: List[Observation] = []
        self._cache: Optional[Tuple[LabelSet, np.ndarray, np.ndarray]] = None

    def add(self, features: FeatureVector, label: str) -> Observation:
        """Append one observation."""
        observation = Observation(features=tuple(features), label=label)
        self._observations.append(observation)
        self._cache = None
        return observation

    @property
    def observations(self) -> Tuple[Observation, ...]:
        return tuple(self._observations)

    @property
    def feature_length(self) -> Optional[int]:
        """Length of the first observation, None when empty."""
        if not self._observations:
            return None
        return len(self._observations[0])

    def validate(self) -> int:
        """
        Check every observation has the same, non-zero feature length.

        Returns:
            The common feature length

        Raises:
            ContractViolation: On an empty vector or a length mismatch
        """
        expected = self.feature_length
        if not expected:
            raise ContractViolation("Observations must have at least one feature")
        for position, observation in enumerate(self._observations):
            if len(observation) != expected:
                raise ContractViolation(
                    f"Observation {position} (label '{observation.label}') has "
                    f"{len(observation)} features, expected {expected}"
                )
        return expected

    def build(self) -> Tuple[LabelSet, np.ndarray, np.ndarray]:
        """
        Build the label set, design matrix and one-hot targets.

        Returns:
            Tuple of (label_set, X with shape (m, n), Y with shape (m, k))

        Raises:
            ContractViolation: If feature lengths are inconsistent
        """
        if self._cache is None:
            self.validate()
            label_set = LabelSet(obs.label for obs in self._observations)
            design = np.array([obs.features for obs in self._observations], dtype=float)
            targets = label_set.one_hot([obs.label for obs in self._observations])
            self._cache = (label_set, design, targets)
        return self._cache

    def __len__(self) -> int:
        return len(self._observations)
