"""
Semantic (statistical) matching for bookmark search.

This module implements a dictionary-bounded mixed-script tokenizer and a TF-IDF
inverted index built over AI-enriched bookmark fields.

Components:
- tokenizer: Latin word runs + greedy maximal-match CJK segmentation
- synonyms: Static synonym table with one-hop symmetric expansion
- extractor: Per-bookmark term extraction across all searchable fields
- index_builder: Two-pass postings/TF/IDF construction
- scorer: TF-IDF scoring, display clamp and cosine similarity

Key property: global IDF
- IDF depends on the whole snapshot, so the index is rebuilt in full
- No incremental updates; a rebuild replaces postings, TF and IDF together
"""

from .tokenizer import tokenize
from .synonyms import SYNONYMS, expand, associated_terms
from .extractor import CATEGORY_KEYWORDS, extract_terms
from .index_builder import TfidfIndex, build_index
from .scorer import TfidfScorer, display_score, cosine_similarity

__all__ = [
    "tokenize",
    "SYNONYMS",
    "expand",
    "associated_terms",
    "CATEGORY_KEYWORDS",
    "extract_terms",
    "TfidfIndex",
    "build_index",
    "TfidfScorer",
    "display_score",
    "cosine_similarity",
]
