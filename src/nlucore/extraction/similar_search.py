"""
Edit-distance search of a surface form inside an utterance.

SimilarSearch scores every character window of an utterance whose length
stays within `window_tolerance` characters of the surface form length, so
a form also matches inside a compound ("Salamipizza") or in a script
written without spaces. Token offsets only break ties: among windows at
the same distance, one that starts and ends on token boundaries wins.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from nlucore.config import config

Span = Tuple[int, int]


@dataclass
class SubstringMatch:
    """Best window found for one surface form (end exclusive)."""
    start: int
    end: int
    levenshtein: int
    accuracy: float
    aligned: bool = False

    @property
    def length(self) -> int:
        return self.end - self.start

    def sort_key(self) -> Tuple[int, bool, int, float]:
        """Lower is better: distance, then token alignment, start and accuracy."""
        return (self.levenshtein, not self.aligned, self.start, -self.accuracy)


def compute_accuracy(levenshtein: int, source_length: int, window_length: int) -> float:
    """1 - distance / longest length; identical strings score 1."""
    longest = max(source_length, window_length)
    if longest == 0:
        return 1.0
    return 1 - levenshtein / longest


class SimilarSearch:
    """
    Case-insensitive Levenshtein scoring of utterance windows.

    Example:
        >>> search = SimilarSearch()
        >>> search.get_similarity("Spiderman", "spederman")
        1
        >>> match = search.get_best_substring("I saw spiderman in the city", "Spiderman")
        >>> (match.start, match.end, match.levenshtein)
        (6, 15, 0)
        >>> match = search.get_best_substring("Salamipizza", "Pizza")
        >>> (match.start, match.end)
        (6, 11)
    """

    def __init__(self, window_tolerance: Optional[int] = None):
        if window_tolerance is None:
            window_tolerance = config.NER_WINDOW_TOLERANCE
        if window_tolerance < 0:
            raise ValueError(f"window_tolerance must be non-negative, got {window_tolerance}")
        self.window_tolerance = window_tolerance

    @staticmethod
    def normalize(text: str) -> str:
        return text.casefold()

    def get_similarity(self, first: str, second: str) -> int:
        """Levenshtein distance ignoring case."""
        return Levenshtein.distance(self.normalize(first), self.normalize(second))

    def candidate_windows(self, utterance_length: int, source_length: int) -> List[Span]:
        """
        Character windows whose length is close to the source length.

        Args:
            utterance_length: Length of the scanned text
            source_length: Length of the surface form

        Returns:
            (start, end) windows ordered by start, then by end
        """
        shortest = max(1, source_length - self.window_tolerance)
        longest = source_length + self.window_tolerance
        windows: List[Span] = []
        for start in range(utterance_length):
            last = min(start + longest, utterance_length)
            for end in range(start + shortest, last + 1):
                windows.append((start, end))
        return windows

    def get_best_substring(self, utterance: str, source: str,
                           spans: Sequence[Span] = ()) -> Optional[SubstringMatch]:
        """
        Find the window of the utterance closest to the source text.

        The lowest edit distance wins. Ties go to a window aligned with
        token boundaries, then to the earliest start, then to the higher
        accuracy.

        Args:
            utterance: Text being scanned
            source: Registered surface form
            spans: Token offsets of the utterance, used for tie-breaking

        Returns:
            The best window, or None when no window fits the length band
        """
        if not source:
            return None

        starts = {start for start, _ in spans}
        ends = {end for _, end in spans}
        normalized_source = self.normalize(source)
        best: Optional[SubstringMatch] = None
        for start, end in self.candidate_windows(len(utterance), len(source)):
            window = utterance[start:end]
            # Stop scoring once the distance can no longer match the best one
            cutoff = best.levenshtein if best is not None else None
            distance = Levenshtein.distance(
                normalized_source, self.normalize(window), score_cutoff=cutoff
            )
            if best is not None and distance > best.levenshtein:
                continue
            match = SubstringMatch(
                start=start,
                end=end,
                levenshtein=distance,
                accuracy=compute_accuracy(distance, len(source), len(window)),
                aligned=start in starts and end in ends,
            )
            if best is None or match.sort_key() < best.sort_key():
                best = match
        return best
