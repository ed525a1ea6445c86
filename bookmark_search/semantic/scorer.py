"""
TF-IDF scorer over a built index.

Formula:
    score(doc, query) = Σ over query terms of TF(doc, term) × IDF(term)

Where:
    TF = term count in doc / total term occurrences in doc
    IDF = ln(N / df + 1)

Display scaling:
    Raw semantic scores are mapped to min(raw × 10, 0.99) so every semantic
    result stays below the 1.0 given to exact substring matches.
"""

import math
from typing import Dict, Iterable

from .index_builder import TfidfIndex

SEMANTIC_SCORE_SCALE = 10.0
SEMANTIC_SCORE_CEILING = 0.99


def display_score(raw_score: float) -> float:
    """
    Map a raw TF-IDF score into the semantic display range.

    Examples:
        >>> display_score(0.05)
        0.5
        >>> display_score(0.5)
        0.99
    """
    return min(raw_score * SEMANTIC_SCORE_SCALE, SEMANTIC_SCORE_CEILING)


class TfidfScorer:
    """
    Scores bookmarks of one index against expanded query terms.
    """

    def __init__(self, index: TfidfIndex):
        self.index = index

    def score(self, bookmark_id: str, query_terms: Iterable[str]) -> float:
        """
        Compute the TF-IDF relevance of a bookmark.

        Args:
            bookmark_id: Id of an indexed bookmark
            query_terms: Expanded query terms

        Returns:
            Raw score (>= 0). Bookmarks absent from the index score 0.0.
        """
        weights = self.index.term_weights.get(bookmark_id)
        if not weights:
            return 0.0

        score = 0.0
        for term in query_terms:
            tf = weights.get(term)
            if tf:
                score += tf * self.index.idf.get(term, 0.0)
        return score

    def vector(self, bookmark_id: str) -> Dict[str, float]:
        """TF-IDF vector of an indexed bookmark ({} if unknown)"""
        weights = self.index.term_weights.get(bookmark_id, {})
        return {term: tf * self.index.idf.get(term, 0.0) for term, tf in weights.items()}


def cosine_similarity(first: Dict[str, float], second: Dict[str, float]) -> float:
    """
    Cosine similarity of two sparse vectors keyed by term.

    Example:
        >>> cosine_similarity({'a': 1.0}, {'a': 2.0})
        1.0
    """
    if not first or not second:
        return 0.0

    if len(second) < len(first):
        first, second = second, first
    dot = sum(value * second.get(term, 0.0) for term, value in first.items())
    if dot == 0:
        return 0.0

    norm = math.sqrt(sum(v * v for v in first.values())) * math.sqrt(sum(v * v for v in second.values()))
    return dot / norm if norm else 0.0
