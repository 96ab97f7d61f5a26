'''

Document search pipeline: query validation, document loading, section
extraction, scoring, ranking and response assembly.

'''

import os
from typing import Optional

from docsearch.lib.converter import load_markup
from docsearch.lib.errors import DocumentNotFoundError, EmptyQueryError
from docsearch.lib.ranking import expand_parents_to_children
from docsearch.lib.response import build_response, detect_language
from docsearch.lib.scoring import score_sections, tokenize_query
from docsearch.lib.sections import build_section_relationships, extract_sections
from docsearch.type.sections import SearchResult

import logging
logging.basicConfig(level=logging.ERROR, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DOCUMENT_DIR = os.path.join("src", "documents")
DOCUMENT_NAME = "[AIVIN] - BRD.docx"


def resolve_document_path(document_dir: str = DOCUMENT_DIR, document_name: str = DOCUMENT_NAME) -> str:
    """Resolve the source document relative to the process working directory."""
    return os.path.join(os.getcwd(), os.path.expanduser(document_dir), document_name)


def search_document(
    query: str,
    user_input: Optional[str] = None,
    document_path: Optional[str] = None,
) -> SearchResult:
    """
    Find the sections of the source document most relevant to a query.

    Args:
        query (str): Keyword search text; must be non-empty after trimming.
        user_input (str, optional): Caller's original text, used only to pick
            the response language.
        document_path (str, optional): Document to search. Defaults to the
            fixed document under the working directory.

    Returns:
        SearchResult: Rendered summary and structured relevant sections.

    Raises:
        EmptyQueryError: The query is empty after trimming.
        DocumentNotFoundError: The document does not exist.
    """
    query = (query or "").strip()
    if not query:
        raise EmptyQueryError()

    lang = detect_language(user_input) if user_input is not None else None
    logger.info(f"user_input: {user_input}")
    logger.info(f"Query: {query}")
    logger.info(f"Language: {lang}")

    if document_path is None:
        document_path = resolve_document_path()
    filename = os.path.basename(document_path)
    if not os.path.isfile(document_path):
        raise DocumentNotFoundError(filename, os.path.dirname(document_path))

    document = load_markup(document_path)
    sections = extract_sections(document)
    relationships = build_section_relationships(sections)

    query_words = tokenize_query(query)
    logger.info(f"Query words: {query_words}")

    scored_sections = score_sections(sections, query_words)
    top_sections = expand_parents_to_children(sections, scored_sections, query_words)

    return build_response(filename, query, top_sections, relationships, lang)
