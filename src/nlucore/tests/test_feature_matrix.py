"""
Unit tests for nlucore.classification.feature_matrix.
"""
import pytest

from nlucore.classification import FeatureMatrix, LabelSet
from nlucore.errors import ContractViolation


class TestLabelSet:
    """Tests for LabelSet."""

    def test_first_seen_order(self):
        """Test labels keep the order they were first added in."""
        label_set = LabelSet(["b", "a", "b", "c"])
        assert label_set.labels == ("b", "a", "c")
        assert len(label_set) == 3
        assert list(label_set) == ["b", "a", "c"]

    def test_index_of(self):
        """Test positions, and -1 for unknown labels."""
        label_set = LabelSet(["greet", "bye"])
        assert label_set.index_of("bye") == 1
        assert label_set.index_of("none") == -1
        assert "greet" in label_set
        assert "none" not in label_set

    def test_add_returns_position(self):
        """Test add() is idempotent and returns the position."""
        label_set = LabelSet()
        assert label_set.add("x") == 0
        assert label_set.add("y") == 1
        assert label_set.add("x") == 0

    def test_one_hot(self):
        """Test one-hot rows follow the label order."""
        label_set = LabelSet(["one", "two"])
        encoded = label_set.one_hot(["two", "one", "two"])
        assert encoded.tolist() == [[0.0, 1.0], [1.0, 0.0], [0.0, 1.0]]


class TestFeatureMatrix:
    """Tests for FeatureMatrix."""

    def test_add_and_build(self):
        """Test arrays are built from the observations."""
        matrix = FeatureMatrix()
        matrix.add([1, 0, 1], "greet")
        matrix.add([0, 1, 0], "bye")
        label_set, design, targets = matrix.build()
        assert label_set.labels == ("greet", "bye")
        assert design.shape == (2, 3)
        assert design.tolist() == [[1.0, 0.0, 1.0], [0.0, 1.0, 0.0]]
        assert targets.tolist() == [[1.0, 0.0], [0.0, 1.0]]

    def test_observations_are_copied(self):
        """Test later mutation of the caller's list does not leak in."""
        features = [1, 2, 3]
        matrix = FeatureMatrix()
        observation = matrix.add(features, "x")
        features.append(4)
        assert observation.features == (1.0, 2.0, 3.0)

    def test_build_is_cached_until_next_add(self):
        """Test build() reuses arrays until new data arrives."""
        matrix = FeatureMatrix()
        matrix.add([1, 0], "a")
        first = matrix.build()
        assert matrix.build() is first
        matrix.add([0, 1], "b")
        assert matrix.build() is not first

    def test_feature_length(self):
        """Test feature length comes from the first observation."""
        matrix = FeatureMatrix()
        assert matrix.feature_length is None
        matrix.add([1, 0, 0, 1], "a")
        assert matrix.feature_length == 4
        assert len(matrix) == 1

    def test_validate_mismatch(self):
        """Test mismatched lengths raise ContractViolation."""
        matrix = FeatureMatrix()
        matrix.add([1, 0], "a")
        matrix.add([1, 0, 1], "b")
        with pytest.raises(ContractViolation, match="Observation 1 \\(label 'b'\\)"):
            matrix.build()

    def test_validate_empty_matrix(self):
        """Test building without observations raises."""
        with pytest.raises(ContractViolation):
            FeatureMatrix().validate()
