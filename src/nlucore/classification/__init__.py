"""
Intent classification.

Softmax logistic regression trained from accumulated observations.
"""

from nlucore.classification.base import Classifier
from nlucore.classification.feature_matrix import FeatureMatrix, LabelSet
from nlucore.classification.logistic_regression import (
    LogisticRegressionClassifier,
    cross_entropy,
    softmax,
)

__all__ = [
    "Classifier",
    "FeatureMatrix",
    "LabelSet",
    "LogisticRegressionClassifier",
    "cross_entropy",
    "softmax",
]
