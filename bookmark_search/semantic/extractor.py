"""
Per-bookmark term extraction.

Pulls terms from every searchable field of a bookmark into one deduplicated set:
- title
- URL host labels (skipping "www" and labels of 2 characters or fewer)
- AI summary, each AI tag, AI category
- keywords associated with the AI category (added verbatim)
- folder path segments, plus synonyms of any segment matching the synonym table

Extraction never raises: an unparseable URL or a missing optional field simply
contributes no terms.
"""

import logging
from types import MappingProxyType
from typing import Optional, Set
from urllib.parse import urlparse

from ..models import Bookmark
from .synonyms import SYNONYMS, SynonymTable
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

_RAW_CATEGORY_KEYWORDS = {
    'AI': ['ai', '人工智能', '机器学习', '深度学习', 'llm', 'gpt', '大语言模型',
           '神经网络', 'transformer'],
    'Development': ['开发', '编程', 'code', 'programming', 'coding', '前端', '后端', '全栈'],
    'Design': ['设计', 'ui', 'ux', '视觉', '交互', '原型', 'figma'],
    'Productivity': ['效率', '工具', '生产力', '时间管理', '工作流', '自动化'],
    'Learning': ['教程', '学习', '入门', '课程', '指南'],
}

# AI category name -> associated keywords (category names match case-sensitively)
CATEGORY_KEYWORDS: SynonymTable = MappingProxyType({
    category: tuple(dict.fromkeys(keywords))
    for category, keywords in _RAW_CATEGORY_KEYWORDS.items()
})


def host_labels(url: str) -> Set[str]:
    """
    Tokenized host labels of a URL.

    Examples:
        >>> sorted(host_labels("https://www.react.dev/learn"))
        ['dev', 'react']

        >>> host_labels("not a url")
        set()
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError as e:
        logger.debug(f"Skipping host labels for unparseable URL {url!r}: {e}")
        return set()

    if not hostname:
        return set()

    terms = set()
    for label in hostname.split('.'):
        if len(label) > 2 and label != 'www':
            terms |= tokenize(label)
    return terms


def folder_terms(folder_path: str, synonyms: SynonymTable = SYNONYMS) -> Set[str]:
    """
    Terms from folder path segments, with index-time synonym association.

    A segment pulls in a synonym entry (key and all values) when the segment
    equals one of the entry's values or contains the entry's key.

    Example:
        >>> {'金融', 'finance'} <= folder_terms("/金融/银行卡")
        True
    """
    terms = set()
    for segment in filter(None, folder_path.split('/')):
        terms |= tokenize(segment)
        lowered = segment.strip().lower()
        if not lowered:
            continue
        for key, values in synonyms.items():
            if key in lowered or lowered in values:
                terms.add(key)
                terms.update(values)
    return terms


def extract_terms(
    bookmark: Bookmark,
    synonyms: Optional[SynonymTable] = None,
    category_keywords: Optional[SynonymTable] = None,
) -> Set[str]:
    """
    Extract the deduplicated index terms of a bookmark.

    Args:
        bookmark: Bookmark to index
        synonyms: Synonym table for folder association (default: SYNONYMS)
        category_keywords: Category keyword table (default: CATEGORY_KEYWORDS)

    Returns:
        Set of terms
    """
    synonyms = SYNONYMS if synonyms is None else synonyms
    category_keywords = CATEGORY_KEYWORDS if category_keywords is None else category_keywords

    terms = tokenize(bookmark.title)
    terms |= host_labels(bookmark.url)

    if bookmark.ai_summary:
        terms |= tokenize(bookmark.ai_summary)

    for tag in bookmark.ai_tags or ():
        terms |= tokenize(tag)

    if bookmark.ai_category:
        terms |= tokenize(bookmark.ai_category)
        terms.update(category_keywords.get(bookmark.ai_category, ()))

    if bookmark.folder_path:
        terms |= folder_terms(bookmark.folder_path, synonyms)

    return terms
