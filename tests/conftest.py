"""Shared fixtures for bookmark search tests"""

import logging

import pytest

from bookmark_search.models import Bookmark


@pytest.fixture
def make_bookmark():
    """
    Factory for Bookmark instances with sensible defaults.

    URLs default to a host whose labels are all <= 2 characters, so they
    contribute no index terms unless a test asks for them.
    """
    def _make(bookmark_id: str, title: str = "", url: str = "https://a.io", **fields) -> Bookmark:
        return Bookmark(id=bookmark_id, title=title, url=url, **fields)
    return _make


@pytest.fixture
def scenario_bookmarks():
    """Mixed-script corpus in the camelCase shape the browser extension sends"""
    return [
        {
            "id": "b1",
            "title": "MySQL性能优化教程",
            "url": "https://x.com",
            "aiCategory": "Development",
        },
        {
            "id": "b2",
            "title": "Random page",
            "url": "https://y.com",
        },
    ]


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level after a test reconfigures logging"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
