"""Error types raised by nlucore."""

from nlucore.errors.exceptions import ContractViolation

__all__ = ["ContractViolation"]
