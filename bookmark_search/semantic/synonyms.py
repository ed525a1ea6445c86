"""
Static synonym table and one-hop query expansion.

The table maps a term to its associated terms. Expansion is symmetric (a value
finds its key and siblings through a reverse lookup) but never transitive: terms
added during an expansion are not looked up again in the same call.

Both tables in this module are built once at import time and exposed as
read-only mappings of tuples.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

SynonymTable = Mapping[str, Tuple[str, ...]]


def freeze_table(raw: Mapping[str, Sequence[str]]) -> SynonymTable:
    """
    Normalize a raw association table into an immutable one.

    Keys and values are lowercased and stripped, duplicate values are removed
    (first occurrence kept) and every value list becomes a tuple.
    """
    frozen: Dict[str, Tuple[str, ...]] = {}
    for key, values in raw.items():
        normalized = key.strip().lower()
        seen = dict.fromkeys(v.strip().lower() for v in values if v.strip())
        frozen[normalized] = tuple(seen)
    return MappingProxyType(frozen)


SYNONYMS: SynonymTable = freeze_table({
    # Databases
    '数据库': ['mysql', 'postgresql', 'mongodb', 'redis', 'sql', 'database', 'db'],
    'mysql': ['数据库', 'sql', 'database', 'db'],
    'sql': ['数据库', 'mysql', 'postgresql'],
    'database': ['数据库', 'db', 'sql'],

    # AI / machine learning
    'ai': ['人工智能', '机器学习', 'machine learning', '深度学习', 'llm', '大模型'],
    '人工智能': ['ai', 'machine learning', '深度学习'],
    '机器学习': ['ai', 'machine learning', 'ml'],
    '深度学习': ['ai', 'deep learning', '神经网络'],

    # Frontend
    '前端': ['frontend', 'react', 'vue', 'html', 'css', 'javascript'],
    'react': ['前端', 'reactjs', 'jsx'],
    'vue': ['前端', 'vuejs'],

    # Backend
    '后端': ['backend', 'server', 'api', 'node', 'python', 'java'],
    'api': ['后端', '接口', 'rest'],

    # Performance
    '性能': ['performance', '优化', 'speed', 'fast'],
    '优化': ['性能', 'optimization', '调优'],

    # Tutorials
    '教程': ['tutorial', '入门', 'guide', '学习', 'course'],
    '入门': ['教程', 'tutorial', 'beginner', '初学'],

    # Development
    '开发': ['development', 'dev', '编程', 'coding', 'programming'],
    '编程': ['开发', 'coding', 'program'],

    # Finance
    '金融': ['finance', '银行', '银行卡', '支付', '理财', '投资', '保险', 'fintech',
             '数字货币', '加密货币', '虚拟货币'],
    'finance': ['金融', '银行', '理财', '投资'],
    '银行': ['金融', '银行卡', '账户', '存取款'],
    '银行卡': ['银行', '信用卡', '借记卡', '虚拟卡', 'digital card'],
    '信用卡': ['银行卡', 'credit card', '信用', '还款'],
    '支付': ['pay', '付款', '转账', '收款', '交易'],
    '理财': ['投资', '财富', '资产管理', '收益'],
    '投资': ['理财', '基金', '股票', '证券', '资产'],
    '虚拟卡': ['virtual card', '虚拟银行卡', '数字卡', 'e-card'],
    '加密货币': ['crypto', '数字货币', '比特币', '区块链', 'bitcoin', 'eth'],
    '区块链': ['blockchain', '加密货币', '智能合约', 'web3'],

    # Common folder categories
    '产品': ['product', '产品经理', 'pm', '需求', '功能'],
    '运营': ['operation', '增长', '用户运营', '内容运营'],
    '数据': ['data', '数据分析', '大数据', '指标', '统计'],
})


def _reverse_index(table: SynonymTable) -> Mapping[str, Tuple[str, ...]]:
    reverse: Dict[str, List[str]] = {}
    for key, values in table.items():
        for value in values:
            reverse.setdefault(value, []).append(key)
    return MappingProxyType({value: tuple(keys) for value, keys in reverse.items()})


_REVERSE_SYNONYMS = _reverse_index(SYNONYMS)


def expand(terms: Iterable[str], table: Optional[SynonymTable] = None) -> Set[str]:
    """
    Expand terms with their one-hop synonyms.

    For each input term:
    - if the term is a key, add all of its values
    - for every key whose values contain the term, add that key and all its values

    Args:
        terms: Terms to expand (usually the output of tokenize)
        table: Association table (default: SYNONYMS)

    Returns:
        Superset of the input terms

    Example:
        >>> 'mysql' in expand({'数据库'})
        True
    """
    if table is None:
        table, reverse = SYNONYMS, _REVERSE_SYNONYMS
    else:
        reverse = _reverse_index(table)

    expanded = set(terms)
    for term in list(expanded):
        expanded.update(table.get(term, ()))
        for key in reverse.get(term, ()):
            expanded.add(key)
            expanded.update(table[key])
    return expanded


def associated_terms(tags: Iterable[str], table: Optional[SynonymTable] = None) -> List[str]:
    """
    Collect terms loosely associated with free-form tags.

    Matching is by substring in both directions: a key related to the tag
    contributes its values, a value related to the tag contributes its key.
    Results keep discovery order.
    """
    table = SYNONYMS if table is None else table
    associated: Dict[str, None] = {}
    for tag in tags:
        lowered = tag.strip().lower()
        if not lowered:
            continue
        for key, values in table.items():
            if key in lowered or lowered in key:
                associated.update(dict.fromkeys(values))
            for value in values:
                if value in lowered or lowered in value:
                    associated[key] = None
    return list(associated)
