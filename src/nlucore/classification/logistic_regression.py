"""
Multinomial (softmax) logistic regression classifier.

Observations are accumulated with add_observation() and the weight matrix
theta (one row per label, one column per feature) is derived from scratch
by batch gradient descent on every train() call. Inference scores a
feature vector against every row of theta and normalizes the scores with
softmax, so the returned probabilities always sum to 1.

No bias feature is added: callers that want one include a constant
coordinate in their feature vectors.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from nlucore.classification.base import Classifier
from nlucore.classification.feature_matrix import FeatureMatrix
from nlucore.config import config
from nlucore.data_types import Classification, FeatureVector
from nlucore.errors import ContractViolation
from nlucore.perf import StageTimer

logger = logging.getLogger(__name__)

# Smallest step size worth trying before gradient descent gives up
MIN_LEARNING_RATE = 1e-10

SETTING_KEYS = ("learning_rate", "regularization", "max_iterations", "tolerance")


def softmax(scores: np.ndarray) -> np.ndarray:
    """
    Softmax along the last axis, shifted by the max for numerical stability.

    Args:
        scores: Array of shape (k,) or (m, k)

    Returns:
        Array of the same shape whose last axis sums to 1
    """
    shifted = scores - np.max(scores, axis=-1, keepdims=True)
    exps = np.exp(shifted)
    return exps / np.sum(exps, axis=-1, keepdims=True)


def cross_entropy(theta: np.ndarray, design: np.ndarray, targets: np.ndarray,
                  regularization: float) -> float:
    """
    Mean cross-entropy of softmax(X theta^T) against one-hot targets, plus L2 penalty.

    J = -(1/m) * sum(Y * log P) + (lambda / 2m) * ||theta||^2
    """
    samples = design.shape[0]
    logits = design @ theta.T
    shifted = logits - np.max(logits, axis=1, keepdims=True)
    log_probs = shifted - np.log(np.sum(np.exp(shifted), axis=1, keepdims=True))
    loss = -np.sum(targets * log_probs) / samples
    if regularization:
        loss += regularization * np.sum(theta * theta) / (2 * samples)
    return float(loss)


class LogisticRegressionClassifier(Classifier):
    """
    Softmax logistic regression over fixed-length feature vectors.

    Handles:
    - Incremental observation collection (before or after training)
    - Idempotent retraining from the full observation set
    - Probability-ranked inference

    Example:
        >>> classifier = LogisticRegressionClassifier()
        >>> classifier.add_observation([1, 1, 0, 0], "greet")
        >>> classifier.add_observation([0, 0, 1, 1], "bye")
        >>> classifier.train()
        >>> classifier.get_best_classification([1, 0, 0, 0]).label
        'greet'
    """

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        """
        Initialize the classifier.

        Args:
            settings: Optional overrides for learning_rate, regularization,
                      max_iterations and tolerance. Missing keys fall back
                      to the global NluConfig values.
        """
        settings = dict(settings or {})
        unknown = sorted(set(settings) - set(SETTING_KEYS))
        if unknown:
            logger.warning(
                "Ignoring unknown logistic regression settings",
                extra={'unknown_settings': unknown}
            )

        self.learning_rate = float(settings.get("learning_rate", config.LR_LEARNING_RATE))
        self.regularization = float(settings.get("regularization", config.LR_REGULARIZATION))
        self.max_iterations = int(settings.get("max_iterations", config.LR_MAX_ITERATIONS))
        self.tolerance = float(settings.get("tolerance", config.LR_TOLERANCE))

        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.regularization < 0:
            raise ValueError(f"regularization must be non-negative, got {self.regularization}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")

        self.matrix = FeatureMatrix()
        self.theta: Optional[np.ndarray] = None
        self._labels: Tuple[str, ...] = ()

        # Diagnostics from the last train() call
        self.iterations: int = 0
        self.loss: Optional[float] = None
        self.trace: Dict[str, Any] = {}

    # -----------------------------------------------------
    # Observations
    # -----------------------------------------------------

    def add_observation(self, features: FeatureVector, label: str) -> None:
        """
        Queue an observation for the next train() call.

        Lengths are not checked here; train() reports any mismatch.
        """
        self.matrix.add(features, label)

    @property
    def observation_count(self) -> int:
        return len(self.matrix)

    @property
    def labels(self) -> Tuple[str, ...]:
        """Labels in theta row order (empty until trained)."""
        return self._labels

    @property
    def feature_length(self) -> Optional[int]:
        """Feature length theta was trained on."""
        if self.theta is None:
            return None
        return int(self.theta.shape[1])

    @property
    def is_trained(self) -> bool:
        return self.theta is not None

    # -----------------------------------------------------
    # Training
    # -----------------------------------------------------

    def train(self) -> None:
        """
        Derive theta from every observation added so far.

        Any previous theta is discarded. With no observations the
        classifier stays untrained and inference returns nothing.

        Raises:
            ContractViolation: If observations differ in feature length
        """
        if not len(self.matrix):
            self.theta = None
            self._labels = ()
            self.iterations = 0
            self.loss = None
            logger.info("Training skipped: no observations")
            return

        label_set, design, targets = self.matrix.build()

        self.trace = {}
        budget = None if config.LOG_PERFORMANCE_METRICS else float("inf")
        with StageTimer(self.trace, "train", budget_ms=budget,
                        context={'observations_count': len(self.matrix)}):
            theta, iterations, loss = self._gradient_descent(design, targets)

        self.theta = theta
        self._labels = label_set.labels
        self.iterations = iterations
        self.loss = loss

        logger.info(
            "Logistic regression trained",
            extra={
                'labels_count': len(self._labels),
                'observations_count': len(self.matrix),
                'feature_length': int(design.shape[1]),
                'iterations': iterations,
                'loss': round(loss, 6),
                'duration_ms': self.trace.get("timings", {}).get("train"),
            }
        )

    def _gradient_descent(self, design: np.ndarray,
                          targets: np.ndarray) -> Tuple[np.ndarray, int, float]:
        """
        Batch gradient descent from a zero theta.

        A step that raises the loss is rejected and the learning rate
        halved. Stops on the iteration cap, when the loss improves by less
        than the tolerance, or when the learning rate underflows.

        Returns:
            Tuple of (theta, iterations run, final loss)
        """
        samples = design.shape[0]
        theta = np.zeros((targets.shape[1], design.shape[1]))
        learning_rate = self.learning_rate
        loss = cross_entropy(theta, design, targets, self.regularization)

        iteration = 0
        while iteration < self.max_iterations:
            iteration += 1
            probabilities = softmax(design @ theta.T)
            gradient = (probabilities - targets).T @ design / samples
            if self.regularization:
                gradient += self.regularization * theta / samples

            candidate = theta - learning_rate * gradient
            candidate_loss = cross_entropy(candidate, design, targets, self.regularization)

            if candidate_loss > loss:
                learning_rate /= 2
                logger.debug(
                    "Loss increased, halving learning rate",
                    extra={'iterations': iteration, 'learning_rate': learning_rate}
                )
                if learning_rate < MIN_LEARNING_RATE:
                    break
                continue

            improvement = loss - candidate_loss
            theta, loss = candidate, candidate_loss
            if improvement < self.tolerance:
                break

        return theta, iteration, loss

    # -----------------------------------------------------
    # Inference
    # -----------------------------------------------------

    def get_classifications(self, features: FeatureVector) -> List[Classification]:
        """
        Rank every known label by probability.

        Args:
            features: Feature vector with the training feature length

        Returns:
            Classifications sorted by descending value; empty when untrained

        Raises:
            ContractViolation: If the vector length differs from training
        """
        if self.theta is None or not self._labels:
            return []

        vector = np.asarray(features, dtype=float)
        if vector.ndim != 1 or vector.shape[0] != self.theta.shape[1]:
            raise ContractViolation(
                f"Expected {self.theta.shape[1]} features, got {len(features)}"
            )

        budget = None if config.LOG_PERFORMANCE_METRICS else float("inf")
        with StageTimer(self.trace, "classify", budget_ms=budget):
            probabilities = softmax(self.theta @ vector)
        classifications = [
            Classification(label=label, value=float(probability))
            for label, probability in zip(self._labels, probabilities)
        ]
        classifications.sort(key=lambda item: item.value, reverse=True)
        return classifications

    def __repr__(self):
        return (
            f"<LogisticRegressionClassifier labels={len(self._labels)} "
            f"observations={len(self.matrix)} trained={self.is_trained}>"
        )
