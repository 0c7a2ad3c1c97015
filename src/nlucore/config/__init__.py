"""
nlucore configuration package.

Re-exports the global config instance and its class.
"""

from nlucore.config.config import NluConfig, config

__all__ = ["config", "NluConfig"]
