'''

Section extraction and section relationships.

Sections nest by heading level: a heading's content runs until the next
heading whose level is less than or equal to its own, so deeper headings
and their text are part of the enclosing section's content as well.

'''

from typing import Dict, List

from docsearch.type.sections import MarkupDocument, Section, SectionRelationship

MAX_NEIGHBORS = 4
FALLBACK_TITLE = "Document"


def extract_sections(document: MarkupDocument) -> List[Section]:
    """
    Split a flattened markup document into hierarchical sections.

    Text before the first heading is not attached to any section. A document
    without headings yields a single level-1 "Document" section holding the
    whole body text.

    Args:
        document (MarkupDocument): Flat, document-ordered node list.

    Returns:
        List[Section]: Sections in document order with index 0..N-1.
    """
    nodes = document.nodes
    sections: List[Section] = []

    for i, node in enumerate(nodes):
        if not node.is_heading:
            continue

        content = ""
        j = i + 1
        while j < len(nodes):
            following = nodes[j]
            if following.is_heading and following.level <= node.level:
                break
            content += following.text + "\n"
            j += 1

        sections.append(Section(
            level=node.level,
            title=node.text,
            content=content.strip(),
            index=len(sections),
        ))

    if not sections:
        sections.append(Section(level=1, title=FALLBACK_TITLE, content=document.text.strip(), index=0))

    return sections


def build_section_relationships(sections: List[Section]) -> Dict[int, SectionRelationship]:
    """Map each section index to its parent title and up to four same-level neighbor titles."""
    relationships: Dict[int, SectionRelationship] = {}

    for section in sections:
        neighbors = [
            s.title for s in sections
            if s.level == section.level and s.index != section.index
        ][:MAX_NEIGHBORS]

        # nearest preceding section exactly one level up
        ancestors = [
            s for s in sections
            if s.level == section.level - 1 and s.index < section.index
        ]
        parent = ancestors[-1].title if ancestors else None

        relationships[section.index] = SectionRelationship(parent=parent, neighbors=neighbors)

    return relationships
