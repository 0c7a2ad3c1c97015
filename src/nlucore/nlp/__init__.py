"""
Locale-dependent text capabilities.

Selects tokenizers and stemmers for a locale; the algorithms come from NLTK.
"""

from nlucore.nlp.locale_resolver import (
    LanguageCapability,
    LocaleResolver,
    get_truncated_locale,
    token_spans,
)

__all__ = [
    "LanguageCapability",
    "LocaleResolver",
    "get_truncated_locale",
    "token_spans",
]
