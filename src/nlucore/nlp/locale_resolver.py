"""
Locale to tokenizer/stemmer selection.

The entity extractor only needs "split text into tokens" (and callers may
want "reduce a token to its stem") for a locale. LocaleResolver picks an
NLTK implementation for each locale and never fails on an unknown one:
it falls back to the Porter stemmer and the Treebank word tokenizer.

Per-locale "use the alternative stemmer" flags live on the resolver
instance, so two resolvers can be configured differently.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from nltk.stem import PorterStemmer, SnowballStemmer
from nltk.tokenize import RegexpTokenizer, TreebankWordTokenizer

logger = logging.getLogger(__name__)

# Two-letter locale -> Snowball language name
SNOWBALL_LANGUAGES: Dict[str, str] = {
    "ar": "arabic",
    "da": "danish",
    "de": "german",
    "en": "english",
    "es": "spanish",
    "fi": "finnish",
    "fr": "french",
    "hu": "hungarian",
    "it": "italian",
    "nl": "dutch",
    "no": "norwegian",
    "pt": "portuguese",
    "ro": "romanian",
    "ru": "russian",
    "sv": "swedish",
}

# Locales that use Porter unless flagged in use_alternative
PORTER_LOCALES = {"en"}

# Locales tokenized as runs of word characters; everything else uses Treebank
AGGRESSIVE_LOCALES = {
    "en", "fa", "fr", "ru", "es", "it", "nl", "no", "pt", "pl", "sv", "id",
}

WORD_PATTERN = r"\w+"


def get_truncated_locale(locale: Optional[str]) -> Optional[str]:
    """
    Reduce a locale code to its lowercase two-letter language part.

    Examples:
        >>> get_truncated_locale("ESP")
        'es'
        >>> get_truncated_locale("") is None
        True
    """
    if not locale:
        return None
    return locale[:2].lower()


def token_spans(text: str, tokens: Sequence[str]) -> List[Tuple[int, int]]:
    """
    Locate tokens in the text they were produced from.

    Tokens are searched left to right; a token that does not occur
    verbatim (e.g. quotes rewritten by the Treebank tokenizer) is skipped.

    Returns:
        (start, end) character offsets, end exclusive
    """
    spans: List[Tuple[int, int]] = []
    cursor = 0
    for token in tokens:
        if not token:
            continue
        position = text.find(token, cursor)
        if position < 0:
            continue
        spans.append((position, position + len(token)))
        cursor = position + len(token)
    return spans


@dataclass
class LanguageCapability:
    """Tokenizer and stemmer selected for one locale."""
    locale: Optional[str]
    tokenizer: Any
    stemmer: Any

    def tokenize(self, text: str) -> List[str]:
        return list(self.tokenizer.tokenize(text))

    def stem(self, token: str) -> str:
        return self.stemmer.stem(token)

    def tokenize_and_stem(self, text: str) -> List[str]:
        return [self.stem(token) for token in self.tokenize(text)]

    def token_spans(self, text: str) -> List[Tuple[int, int]]:
        return token_spans(text, self.tokenize(text))


class LocaleResolver:
    """
    Chooses NLTK tokenizers and stemmers by locale.

    Instances are cached per resolver, so repeated lookups return the
    same object.

    Example:
        >>> resolver = LocaleResolver()
        >>> resolver.get_tokenizer("en").tokenize("spider-man rocks")
        ['spider', 'man', 'rocks']
        >>> resolver.use_alternative["en"] = True
        >>> type(resolver.get_stemmer("en")).__name__
        'SnowballStemmer'
    """

    def __init__(self, use_alternative: Optional[Dict[str, bool]] = None):
        self.use_alternative: Dict[str, bool] = dict(use_alternative or {})
        self._stemmers: Dict[str, Any] = {}
        self._tokenizers: Dict[str, Any] = {}

    def get_stemmer(self, locale: Optional[str] = None):
        """Stemmer for a locale; Porter when the locale is unknown or missing."""
        language = get_truncated_locale(locale)
        snowball = SNOWBALL_LANGUAGES.get(language) if language else None

        if snowball and (language not in PORTER_LOCALES or self.use_alternative.get(language)):
            key = f"snowball:{snowball}"
            if key not in self._stemmers:
                self._stemmers[key] = SnowballStemmer(snowball)
            return self._stemmers[key]

        if language and not snowball:
            logger.debug("No stemmer for locale, using Porter", extra={'locale': locale})
        if "porter" not in self._stemmers:
            self._stemmers["porter"] = PorterStemmer()
        return self._stemmers["porter"]

    def get_tokenizer(self, locale: Optional[str] = None):
        """Tokenizer for a locale; Treebank when the locale is unknown or missing."""
        language = get_truncated_locale(locale)
        key = "aggressive" if language in AGGRESSIVE_LOCALES else "treebank"
        if key not in self._tokenizers:
            if key == "aggressive":
                self._tokenizers[key] = RegexpTokenizer(WORD_PATTERN)
            else:
                self._tokenizers[key] = TreebankWordTokenizer()
        return self._tokenizers[key]

    def get_capability(self, locale: Optional[str] = None) -> LanguageCapability:
        """Bundle the tokenizer and stemmer for a locale."""
        return LanguageCapability(
            locale=get_truncated_locale(locale),
            tokenizer=self.get_tokenizer(locale),
            stemmer=self.get_stemmer(locale),
        )
