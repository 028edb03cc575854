#!/usr/bin/env python3
"""
Query Parser - Free text to structured Requirement.

Category detection walks CATEGORY_KEYWORDS in declaration order and stops at
the first category with a keyword found in the text, so the order of the
table decides ties ("python data analysis" resolves to research).
"""

import re
from typing import List, Optional

from core.scorer.models import Requirement, MAX_REQUIREMENT_SKILLS

CATEGORY_KEYWORDS = (
    ('research', ('research', 'analyze', 'analysis', 'study', 'investigate', 'report')),
    ('writing', ('write', 'writing', 'copywriting', 'content', 'blog', 'article', 'copy')),
    ('code', ('code', 'coding', 'programming', 'developer', 'software', 'python', 'javascript', 'api')),
    ('image', ('image', 'design', 'graphic', 'logo', 'illustration', 'visual', 'creative')),
    ('data', ('data', 'analytics', 'statistics', 'dashboard', 'excel', 'spreadsheet')),
    ('automation', ('automation', 'workflow', 'integrate', 'bot', 'scrape', 'automate')),
)

STOP_WORDS = frozenset({
    'i', 'need', 'help', 'with', 'want', 'looking', 'for', 'someone', 'to',
    'can', 'who', 'that', 'a', 'an', 'the', 'my', 'me', 'please', 'do',
    'make', 'create', 'build', 'get',
})

_NON_WORD = re.compile(r'[^a-z0-9\s]')


def detect_category(text: str) -> Optional[str]:
    """Return the first category whose keywords appear in ``text`` (lowercase)."""
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return None


def extract_skill_keywords(text: str) -> List[str]:
    """Significant tokens of ``text`` (lowercase), unique in first-seen order, at most 5."""
    words = _NON_WORD.sub(' ', text).split()
    keywords = []
    for word in words:
        if len(word) > 2 and word not in STOP_WORDS and word not in keywords:
            keywords.append(word)
    return keywords[:MAX_REQUIREMENT_SKILLS]


def parse_query(query: Optional[str]) -> Requirement:
    """
    Parse a natural language request into a Requirement.

    Example:
        >>> parse_query("I need help with Python data analysis")
        Requirement(skills=['python', 'data', 'analysis'], category='research', budget=None)
    """
    if not query:
        return Requirement(skills=[], category=None)

    text = query.lower()
    return Requirement(
        skills=extract_skill_keywords(text),
        category=detect_category(text)
    )
