'''

Lexical relevance scoring of sections against a query.

'''

import re
from typing import List

from docsearch.type.sections import ScoredSection, Section

import logging
logging.basicConfig(level=logging.ERROR, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

TITLE_MATCH_SCORE = 3
CONTENT_MATCH_SCORE = 1
MAIN_SECTION_SCORE = 3

WHOLE_NUMBER = re.compile(r'^[0-9]+$')

# tried in order, first hit wins
STEM_SUFFIXES = ["s", "es", "ing", "ed", "ly", "er", "est"]


def tokenize_query(query: str) -> List[str]:
    """Lowercase the query and split it on whitespace, dropping empty tokens."""
    return [word for word in query.lower().split() if word]


def _strip_suffix(word: str, suffix: str) -> str:
    return word[:-len(suffix)] if word.endswith(suffix) else word


def _matches_main_section(number: str, section_title: str) -> bool:
    # "4" matches "4. Scope" and "4 Scope", never "41. Other" or "4.1 Sub"
    return re.match(rf'{number}(?![0-9])(?!\.[0-9])', section_title) is not None


def calculate_relevance_score(text: str, query_words: List[str], section_title: str) -> float:
    """
    Score one section against the query tokens.

    Per token: a whole number that names the section's main number scores 3
    and nothing else. Otherwise a title hit scores 3, and independently a
    content hit scores 1; if there is no content hit, the first suffix-stripped
    variant found in the content scores 1.

    Args:
        text (str): Section title and content joined by a space.
        query_words (List[str]): Lowercase, non-empty query tokens.
        section_title (str): The section's heading text.

    Returns:
        float: Non-negative relevance score.
    """
    lower_text = text.lower()
    lower_title = section_title.lower()
    score = 0

    for word in query_words:
        if WHOLE_NUMBER.match(word) and _matches_main_section(word, section_title):
            score += MAIN_SECTION_SCORE
            logger.info(f"Main section match: \"{word}\" matches main section \"{section_title}\"")
            continue

        if word in lower_title:
            score += TITLE_MATCH_SCORE

        if word in lower_text:
            score += CONTENT_MATCH_SCORE
            continue

        for suffix in STEM_SUFFIXES:
            stem = _strip_suffix(word, suffix)
            if stem != word and stem in lower_text:
                score += CONTENT_MATCH_SCORE
                break

    return score


def score_sections(sections: List[Section], query_words: List[str]) -> List[ScoredSection]:
    """Score every section and sort descending; equal scores keep document order."""
    scored = [
        ScoredSection(
            level=section.level,
            title=section.title,
            content=section.content,
            index=section.index,
            score=calculate_relevance_score(f"{section.title} {section.content}", query_words, section.title),
        )
        for section in sections
    ]
    return sorted(scored, key=lambda s: s.score, reverse=True)
