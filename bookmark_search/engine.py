"""
Bookmark search engine: exact substring matching + TF-IDF semantic matching.

Search runs in two passes over one immutable snapshot:
1. Exact pass: case-insensitive substring match on title, URL, AI summary,
   AI tags and AI category. Score 1.0, original bookmark order.
2. Semantic pass: tokenize + one-hop synonym expansion of the query, TF-IDF
   scoring of the remaining bookmarks, descending score (stable), displayed as
   min(raw × 10, 0.99).

Exact results always come first. A rebuild swaps the whole snapshot (bookmarks
and index) in a single assignment, so a search sees either the old or the new
snapshot, never a mix.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from .config import Settings
from .models import Bookmark, InvalidBookmarkError, MatchSource, SearchResult
from .semantic import (
    SYNONYMS,
    TfidfIndex,
    TfidfScorer,
    associated_terms,
    build_index,
    cosine_similarity,
    display_score,
    expand,
    tokenize,
)
from .semantic.synonyms import SynonymTable

logger = logging.getLogger(__name__)

BookmarkInput = Union[Bookmark, Mapping[str, Any]]


def coerce_bookmarks(records: Optional[Iterable[BookmarkInput]]) -> Tuple[Bookmark, ...]:
    """
    Validate records into Bookmarks.

    Raises:
        InvalidBookmarkError: On the first record that fails validation
    """
    bookmarks = []
    for position, record in enumerate(records or ()):
        if isinstance(record, Bookmark):
            bookmarks.append(record)
            continue
        try:
            bookmarks.append(Bookmark.model_validate(record))
        except ValidationError as e:
            logger.error(f"Rejected bookmark at position {position}: {e.error_count()} validation error(s)")
            raise InvalidBookmarkError(position, str(e)) from e
    return tuple(bookmarks)


@dataclass(frozen=True)
class _Snapshot:
    bookmarks: Tuple[Bookmark, ...]
    index: TfidfIndex


def _exact_match(bookmark: Bookmark, needle: str) -> bool:
    # casefold() so final sigma and ß compare equal to their standalone forms
    if needle in bookmark.title.casefold() or needle in bookmark.url.casefold():
        return True
    if bookmark.ai_summary and needle in bookmark.ai_summary.casefold():
        return True
    if bookmark.ai_tags and any(needle in tag.casefold() for tag in bookmark.ai_tags):
        return True
    return bool(bookmark.ai_category) and needle in bookmark.ai_category.casefold()


class SemanticSearchEngine:
    """
    Search engine over one bookmark snapshot.

    Usage::

        engine = SemanticSearchEngine(bookmarks)
        results = engine.search("数据库")

        engine.update_bookmarks(new_bookmarks)  # full rebuild
    """

    def __init__(
        self,
        bookmarks: Optional[Iterable[BookmarkInput]] = None,
        synonyms: Optional[SynonymTable] = None,
        category_keywords: Optional[SynonymTable] = None,
        settings: Optional[Settings] = None,
    ):
        self.synonyms = SYNONYMS if synonyms is None else synonyms
        self.category_keywords = category_keywords
        self.settings = settings or Settings()
        self._write_lock = threading.Lock()
        self._snapshot = self._build_snapshot(bookmarks)

    @property
    def bookmarks(self) -> Tuple[Bookmark, ...]:
        return self._snapshot.bookmarks

    @property
    def index(self) -> TfidfIndex:
        return self._snapshot.index

    def _build_snapshot(self, records: Optional[Iterable[BookmarkInput]]) -> _Snapshot:
        bookmarks = coerce_bookmarks(records)

        seen = set()
        for bookmark in bookmarks:
            if bookmark.id in seen:
                logger.warning(f"Duplicate bookmark id {bookmark.id!r} - only the first is returned by search")
            seen.add(bookmark.id)

        index = build_index(bookmarks, self.synonyms, self.category_keywords)
        return _Snapshot(bookmarks=bookmarks, index=index)

    def update_bookmarks(self, bookmarks: Iterable[BookmarkInput]) -> None:
        """
        Rebuild the index from a new snapshot, replacing the old one entirely.

        Validation happens before the swap: if any record is invalid the
        current snapshot is kept and InvalidBookmarkError is raised.
        """
        with self._write_lock:
            snapshot = self._build_snapshot(bookmarks)
            self._snapshot = snapshot

    def search(self, query: Optional[str]) -> List[SearchResult]:
        """
        Search bookmarks.

        Args:
            query: Free-text query (empty or whitespace-only returns [])

        Returns:
            Exact matches (score 1.0, bookmark order) followed by semantic
            matches (score <= 0.99, descending)
        """
        if not query or not query.strip():
            return []

        snapshot = self._snapshot
        needle = query.strip().casefold()

        results: List[SearchResult] = []
        seen_ids = set()

        for bookmark in snapshot.bookmarks:
            if bookmark.id not in seen_ids and _exact_match(bookmark, needle):
                seen_ids.add(bookmark.id)
                results.append(SearchResult(item=bookmark, score=1.0, source=MatchSource.EXACT))
        exact_count = len(results)

        query_terms = expand(tokenize(query), self.synonyms)
        scorer = TfidfScorer(snapshot.index)

        scored = []
        for bookmark in snapshot.bookmarks:
            if bookmark.id in seen_ids:
                continue
            seen_ids.add(bookmark.id)
            score = scorer.score(bookmark.id, query_terms)
            if score > 0:
                scored.append((bookmark, score))

        # sorted() is stable: equal scores keep bookmark order
        for bookmark, score in sorted(scored, key=lambda pair: pair[1], reverse=True):
            results.append(SearchResult(
                item=bookmark,
                score=display_score(score),
                source=MatchSource.SEMANTIC,
            ))

        logger.debug(
            f"Search {query!r}: {exact_count} exact, {len(results) - exact_count} semantic "
            f"({len(query_terms)} expanded terms)"
        )
        return results

    def similar(self, bookmark_id: str, limit: Optional[int] = None) -> List[Bookmark]:
        """
        Bookmarks most similar to the given one by TF-IDF cosine similarity.

        Args:
            bookmark_id: Reference bookmark id (unknown ids return [])
            limit: Maximum results (default: settings.similar_limit)
        """
        limit = self.settings.similar_limit if limit is None else limit
        snapshot = self._snapshot
        if limit <= 0 or bookmark_id not in snapshot.index.term_weights:
            return []

        scorer = TfidfScorer(snapshot.index)
        reference = scorer.vector(bookmark_id)
        if not reference:
            return []

        candidates = []
        seen_ids = {bookmark_id}
        for bookmark in snapshot.bookmarks:
            if bookmark.id in seen_ids:
                continue
            seen_ids.add(bookmark.id)
            similarity = cosine_similarity(reference, scorer.vector(bookmark.id))
            if similarity > 0:
                candidates.append((bookmark, similarity))

        candidates.sort(key=lambda pair: pair[1], reverse=True)
        return [bookmark for bookmark, _ in candidates[:limit]]

    def suggest(self, text: Optional[str], limit: Optional[int] = None) -> List[str]:
        """
        Search-as-you-type suggestions from the synonym table and bookmarks.

        Sources, in order: synonym keys related to the input, synonym values
        containing it, title words (> 2 chars) containing it, AI tags
        containing it.
        """
        limit = self.settings.suggestion_limit if limit is None else limit
        if not text or not text.strip() or limit <= 0:
            return []

        needle = text.strip().lower()
        snapshot = self._snapshot
        suggestions = {}

        for key, values in self.synonyms.items():
            if needle in key or key in needle:
                suggestions[key] = None
            for value in values:
                if needle in value:
                    suggestions[value] = None

        for bookmark in snapshot.bookmarks:
            for word in bookmark.title.lower().split():
                if needle in word and len(word) > 2:
                    suggestions[word] = None
            for tag in bookmark.ai_tags or ():
                if needle in tag.lower():
                    suggestions[tag] = None

        return list(suggestions)[:limit]

    def related_terms(self, tags: Sequence[str]) -> List[str]:
        """Terms associated with free-form tags through the synonym table"""
        return associated_terms(tags, self.synonyms)


class EngineProvider:
    """
    Owns one lazily created SemanticSearchEngine for the composing application.

    get_or_create() semantics:
    - first call with bookmarks: build and cache the engine
    - later call with bookmarks: rebuild the cached engine in place
    - call without bookmarks and no engine yet: build against an empty corpus
    """

    def __init__(self, settings: Optional[Settings] = None, **engine_options: Any):
        self.settings = settings or Settings()
        self._engine_options = engine_options
        self._engine: Optional[SemanticSearchEngine] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[SemanticSearchEngine]:
        return self._engine

    def get_or_create(self, bookmarks: Optional[Iterable[BookmarkInput]] = None) -> SemanticSearchEngine:
        with self._lock:
            if self._engine is None:
                logger.info("Creating search engine" + ("" if bookmarks is not None else " (empty corpus)"))
                self._engine = SemanticSearchEngine(
                    bookmarks, settings=self.settings, **self._engine_options
                )
            elif bookmarks is not None:
                self._engine.update_bookmarks(bookmarks)
            return self._engine

    def reset(self) -> None:
        """Drop the cached engine"""
        with self._lock:
            if self._engine is not None:
                logger.info("Discarding cached search engine")
            self._engine = None
