"""
Mixed-script tokenizer for bookmark indexing.

Tokenization pipeline:
1. Extract maximal runs of Latin letters, lowercase each run as one term
2. Strip Latin letters, whitespace, digits and punctuation from the text
3. Segment the remaining (mostly CJK) characters with greedy maximal matching
   against CJK_DICTIONARY: try 4, then 3, then 2 characters; fall back to a
   single character when nothing matches
4. Return the union of both term sets

Latin runs shorter than 2 letters are dropped. Single-character terms only come
from the CJK fallback path.
"""

import re
import string
import unicodedata
from typing import Optional, Set

# Known multi-character CJK terms used for maximal-match segmentation
CJK_DICTIONARY = frozenset([
    '数据库', '优化', '性能', '调优', '教程', '指南', '入门', '进阶',
    '开发', '编程', '代码', '函数', '变量', '对象', '接口',
    '前端', '后端', '全栈', '框架', '工具',
    '人工智能', '机器学习', '深度学习', '神经网络',
    '设计', '模式', '架构', '原理', '实现',
    '安装', '配置', '部署', '运行', '测试',
    '文件', '目录', '路径', '网络', '请求', '响应',
    '数据', '存储', '缓存', '索引', '查询',
    '算法', '数据结构', '排序', '搜索',
    '用户', '界面', '交互', '体验',
    '安全', '认证', '授权', '加密',
    '系统', '操作', '管理', '监控',
])

MAX_WORD_LENGTH = 4
MIN_WORD_LENGTH = 2

_LATIN_RUN = re.compile(r'[A-Za-z]+')


def _is_stripped(char: str) -> bool:
    # Latin letters, whitespace, digits, punctuation and symbols
    if char.isspace() or char in string.ascii_letters:
        return True
    return unicodedata.category(char)[0] in ('N', 'P', 'S', 'Z', 'C')


def segment_cjk(text: str) -> Set[str]:
    """
    Greedy left-to-right maximal-match segmentation.

    Examples:
        >>> sorted(segment_cjk("性能优化教程"))
        ['优化', '性能', '教程']

        >>> sorted(segment_cjk("数据库的"))
        ['数据库', '的']
    """
    terms = set()
    i = 0
    while i < len(text):
        for length in range(MAX_WORD_LENGTH, MIN_WORD_LENGTH - 1, -1):
            word = text[i:i + length]
            if len(word) == length and word in CJK_DICTIONARY:
                terms.add(word)
                i += length
                break
        else:
            terms.add(text[i])
            i += 1
    return terms


def tokenize(text: Optional[str]) -> Set[str]:
    """
    Tokenize mixed Latin/CJK text into a set of normalized terms.

    Args:
        text: Input text (None or empty is allowed)

    Returns:
        Set of lowercase terms

    Examples:
        >>> sorted(tokenize("MySQL性能优化教程"))
        ['mysql', '优化', '性能', '教程']

        >>> sorted(tokenize("React 官方文档"))
        ['react', '官', '文', '方', '档']

        >>> tokenize("   ")
        set()
    """
    if not text:
        return set()

    latin_terms = {
        run.lower() for run in _LATIN_RUN.findall(text)
        if len(run) >= MIN_WORD_LENGTH
    }

    residue = ''.join(ch for ch in text if not _is_stripped(ch)).lower()

    return latin_terms | segment_cjk(residue)
