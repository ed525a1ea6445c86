"""
TF-IDF index builder - inverted index over a bookmark snapshot.

Two passes:
1. Per bookmark: extract terms, count them, normalize counts by the bookmark's
   total term occurrences (TF), and record postings (term -> bookmark ids)
2. Per term: IDF = ln(N / df + 1), computed once N and every df are final

The index is built from exactly one snapshot and never updated incrementally.
"""

import logging
import math
import time
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Sequence, Set

from ..models import Bookmark
from .extractor import extract_terms
from .synonyms import SynonymTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TfidfIndex:
    """Immutable inverted index for one bookmark snapshot"""
    postings: Mapping[str, FrozenSet[str]] = field(default_factory=dict)     # term -> bookmark ids
    term_weights: Mapping[str, Mapping[str, float]] = field(default_factory=dict)  # id -> term -> TF
    idf: Mapping[str, float] = field(default_factory=dict)                   # term -> IDF
    document_count: int = 0

    @property
    def vocabulary_size(self) -> int:
        return len(self.postings)

    def tf(self, bookmark_id: str, term: str) -> float:
        return self.term_weights.get(bookmark_id, {}).get(term, 0.0)


def build_index(
    bookmarks: Sequence[Bookmark],
    synonyms: Optional[SynonymTable] = None,
    category_keywords: Optional[SynonymTable] = None,
) -> TfidfIndex:
    """
    Build the TF-IDF index for a bookmark snapshot.

    Args:
        bookmarks: Full snapshot (an empty sequence yields an empty index)
        synonyms: Synonym table passed to term extraction
        category_keywords: Category keyword table passed to term extraction

    Returns:
        TfidfIndex with postings, normalized term frequencies and IDF

    Example:
        >>> index = build_index([Bookmark(id="b1", title="React hooks", url="https://react.dev")])
        >>> sorted(index.postings)
        ['dev', 'hooks', 'react']
        >>> index.tf("b1", "react")
        0.3333333333333333
    """
    started = time.perf_counter()

    postings: Dict[str, Set[str]] = {}
    term_weights: Dict[str, Dict[str, float]] = {}

    # Pass 1: term frequencies + postings
    for bookmark in bookmarks:
        counts = Counter(extract_terms(bookmark, synonyms, category_keywords))
        total = sum(counts.values())

        term_weights[bookmark.id] = {
            term: count / total for term, count in counts.items()
        } if total else {}

        for term in counts:
            postings.setdefault(term, set()).add(bookmark.id)

    # Pass 2: IDF (needs the final corpus size and document frequencies)
    document_count = len(bookmarks)
    idf = {
        term: math.log(document_count / len(ids) + 1)
        for term, ids in postings.items()
    }

    index = TfidfIndex(
        postings=MappingProxyType({term: frozenset(ids) for term, ids in postings.items()}),
        term_weights=MappingProxyType({
            bookmark_id: MappingProxyType(weights) for bookmark_id, weights in term_weights.items()
        }),
        idf=MappingProxyType(idf),
        document_count=document_count,
    )

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"Built TF-IDF index: {document_count} bookmarks, "
        f"{index.vocabulary_size} unique terms in {elapsed_ms:.1f}ms"
    )

    return index
