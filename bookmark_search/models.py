"""Typed bookmark and search result models"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class InvalidBookmarkError(ValueError):
    """A supplied record could not be validated as a Bookmark"""

    def __init__(self, position: int, message: str):
        super().__init__(f"Bookmark at position {position} is invalid: {message}")
        self.position = position


class Bookmark(BaseModel):
    """
    Read-only bookmark record consumed by the search engine.

    Accepts both snake_case field names and the camelCase keys used by the
    browser extension (aiSummary, aiTags, aiCategory, folderPath). Extra keys
    such as userTags or createdAt are ignored.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Unique bookmark id")
    title: str = Field(..., description="Page title")
    url: str = Field(..., description="Bookmarked URL")
    ai_summary: Optional[str] = Field(None, alias="aiSummary", description="AI-generated summary")
    ai_tags: Optional[List[str]] = Field(None, alias="aiTags", description="AI-generated tags")
    ai_category: Optional[str] = Field(None, alias="aiCategory", description="AI-assigned category")
    folder_path: Optional[str] = Field(None, alias="folderPath", description="Folder path, e.g. /金融/银行卡")


class MatchSource(str, Enum):
    """Which pass produced a search result"""
    EXACT = "exact"
    SEMANTIC = "semantic"


class SearchResult(BaseModel):
    """Single ranked search result"""
    model_config = ConfigDict(frozen=True)

    item: Bookmark
    score: float = Field(..., ge=0.0, le=1.0, description="1.0 for exact matches, <= 0.99 for semantic")
    source: MatchSource
    matches: List[Dict[str, Any]] = Field(default_factory=list)
    highlights: Dict[str, str] = Field(default_factory=dict)
