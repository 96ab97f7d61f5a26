'''

Ranking of scored sections, with parent-to-children expansion.

A top-ranked whole-number section ("4. Requirements") whose title matches
the query pulls in its numbered sub-sections ("4.1 ...", "4.2 ...") just
below its own score. At most one section is expanded per request.

'''

import re
from typing import List, Optional

from docsearch.type.sections import ScoredSection, Section

import logging
logging.basicConfig(level=logging.ERROR, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

TOP_K = 5
CHILD_SCORE_OFFSET = 0.1
MIN_CHILD_SCORE = 0.1

WHOLE_SECTION_PREFIX = re.compile(r'^[0-9]+\.$')


def child_score(parent_score: float) -> float:
    return max(parent_score - CHILD_SCORE_OFFSET, MIN_CHILD_SCORE)


def find_children(sections: List[Section], parent: Section) -> List[Section]:
    """
    Return the numbered sub-sections of a whole-number section.

    The parent's title must start with a segment like "4." (digits and a
    single period). Children are later sections whose title starts with that
    segment immediately followed by a digit.
    """
    segments = parent.title.split()
    if not segments:
        return []
    prefix = segments[0]
    if not WHOLE_SECTION_PREFIX.match(prefix):
        return []
    child_pattern = re.compile(rf'^{re.escape(prefix)}[0-9]+')
    return [s for s in sections if child_pattern.match(s.title) and s.index > parent.index]


def _title_matches_query(section: Section, query_words: List[str]) -> bool:
    title = section.title.lower()
    return any(word.lower() in title for word in query_words)


def expand_parents_to_children(
    sections: List[Section],
    scored_sections: List[ScoredSection],
    query_words: List[str],
    top_k: int = TOP_K,
) -> List[ScoredSection]:
    """
    Pick the final sections to return.

    Args:
        sections (List[Section]): All sections in document order.
        scored_sections (List[ScoredSection]): Sections sorted by descending score.
        query_words (List[str]): Query tokens.
        top_k (int): Target result count; expansion may exceed it.

    Returns:
        List[ScoredSection]: Final ranked sections.
    """
    initial_top = scored_sections[:top_k]
    final_sections: List[ScoredSection] = []
    expanded: Optional[ScoredSection] = None

    for section in initial_top:
        if section.score <= 0 or not _title_matches_query(section, query_words):
            continue
        children = find_children(sections, section)
        if not children:
            continue

        logger.info(f"Appending parent \"{section.title}\" with {len(children)} children")
        final_sections.append(section)
        score = child_score(section.score)
        for child in children:
            final_sections.append(ScoredSection(
                level=child.level,
                title=child.title,
                content=child.content,
                index=child.index,
                score=score,
            ))
        expanded = section
        break

    included = {s.index for s in final_sections}
    for section in initial_top:
        if section is not expanded and section.index not in included:
            final_sections.append(section)
            included.add(section.index)

    final_sections.sort(key=lambda s: s.score, reverse=True)

    if len(final_sections) < top_k:
        remaining = [s for s in scored_sections[top_k:] if s.index not in included]
        final_sections.extend(remaining[:top_k - len(final_sections)])

    return final_sections
