"""
Core Error Classes

Custom exceptions for nlucore.
"""


class ContractViolation(Exception):
    """Raised when a caller breaks the feature-vector contract of a classifier."""
    pass
