'''

Response assembly: rendered text summary plus structured section payload.

'''

import re
from typing import Dict, List, Optional

from docsearch.type.sections import (
    RelevantSection,
    ScoredSection,
    SearchResult,
    SectionRelationship,
)

import logging
logging.basicConfig(level=logging.ERROR, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

RELEVANCE_LABELS = ["Most Relevant", "Highly Relevant", "Relevant"]
DEFAULT_RELEVANCE_LABEL = "Related"

VIETNAMESE_CHARS = re.compile(
    r'[àáâãăằắẵẳặèéêìíòóôõŏỏọùúûũưừứựỳỹđÀÁÂÃĂẰẮẴẲẶÈÉÊÌÍÒÓÔÕŎỎỌÙÚÛŨƯỪỨỰỲỸĐ]'
)


def detect_language(text: str) -> str:
    """Return "Vietnamese" if the text holds any Vietnamese diacritic, else "English"."""
    if VIETNAMESE_CHARS.search(text):
        return "Vietnamese"
    return "English"


def relevance_label(rank: int) -> str:
    if rank < len(RELEVANCE_LABELS):
        return RELEVANCE_LABELS[rank]
    return DEFAULT_RELEVANCE_LABEL


def build_response(
    filename: str,
    query: str,
    top_sections: List[ScoredSection],
    relationships: Dict[int, SectionRelationship],
    lang: Optional[str] = None,
) -> SearchResult:
    """
    Build the text summary and structured payload for the final sections.

    Every final section appears in the structured payload and in the score
    list; sections with empty content are left out of the rendered body only,
    and body ranks are counted after that filtering.

    Args:
        filename (str): Source document name shown in the summary.
        query (str): Trimmed query as given by the caller.
        top_sections (List[ScoredSection]): Final ranked sections.
        relationships (Dict[int, SectionRelationship]): Parent/neighbor map by section index.
        lang (str, optional): Language the caller should respond in.

    Returns:
        SearchResult: Summary text and relevant sections.
    """
    relevant_sections = []
    for section in top_sections:
        rels = relationships[section.index]
        relevant_sections.append(RelevantSection(
            title=section.title,
            content=section.content,
            parent=rels.parent,
            neighbors=list(rels.neighbors),
        ))

    logger.info(f"Top scores: {[f'{s.title}: {s.score}' for s in top_sections]}")

    with_content = [s for s in top_sections if s.content.strip()]
    combined_content = "\n\n".join(
        f"## {relevance_label(rank)}: {section.title}\n\n{section.content}\n\n---"
        for rank, section in enumerate(with_content)
    )

    score_lines = "\n".join(f"- {s.title} (relevance score: {s.score})" for s in top_sections)
    summary = (
        f"Found {len(relevant_sections)} relevant sections in the document \"{filename}\" "
        f"(may include child sections of relevant parents).\n"
        f"Top matches for \"{query}\":\n"
        f"{score_lines}\n\n"
        f"{combined_content}"
    )

    if lang:
        summary = f"Respond in {lang}\n\n{summary}"
        logger.info(f"Responding in language: {lang}")

    logger.info(f"Returning combined response with {len(relevant_sections)} sections ({len(summary)} chars)")

    return SearchResult(summary=summary, relevant_sections=relevant_sections)
