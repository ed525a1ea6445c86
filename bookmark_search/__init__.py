"""
Bookmark search - exact + TF-IDF semantic search over AI-enriched bookmarks.

Usage:
    from bookmark_search import bootstrap

    provider = bootstrap()
    engine = provider.get_or_create(bookmarks)
    results = engine.search("数据库")

    # Or build an engine directly:
    from bookmark_search import SemanticSearchEngine

    engine = SemanticSearchEngine(bookmarks)
"""

from .models import Bookmark, InvalidBookmarkError, MatchSource, SearchResult
from .config import Settings, load_environment
from .engine import EngineProvider, SemanticSearchEngine
from .runtime import bootstrap

__all__ = [
    "Bookmark",
    "InvalidBookmarkError",
    "MatchSource",
    "SearchResult",
    "Settings",
    "load_environment",
    "EngineProvider",
    "SemanticSearchEngine",
    "bootstrap",
]
