'''

Section data types shared by the document search pipeline.

'''

from dataclasses import dataclass, field
from typing import List, Optional

EMBEDDING_PLACEHOLDER = "placeholder"


@dataclass
class MarkupNode:
    """One block of a flattened markup document. level is 1..6 for h1..h6, 0 otherwise."""
    level: int
    text: str

    @property
    def is_heading(self) -> bool:
        return self.level > 0


@dataclass
class MarkupDocument:
    nodes: List[MarkupNode] = field(default_factory=list)
    text: str = ""


@dataclass
class Section:
    level: int
    title: str
    content: str
    index: int


@dataclass
class ScoredSection(Section):
    score: float = 0


@dataclass
class SectionRelationship:
    parent: Optional[str] = None
    neighbors: List[str] = field(default_factory=list)


@dataclass
class RelevantSection:
    """Externally visible shape of a returned section."""
    title: str
    content: str
    embedding: str = EMBEDDING_PLACEHOLDER
    parent: Optional[str] = None
    neighbors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        item = {
            "title": self.title,
            "content": self.content,
            "embedding": self.embedding,
        }
        if self.parent is not None:
            item["parent"] = self.parent
        item["neighbors"] = list(self.neighbors)
        return item


@dataclass
class SearchResult:
    summary: str
    relevant_sections: List[RelevantSection] = field(default_factory=list)

    def structured_content(self) -> dict:
        return {"relevantSections": [s.to_dict() for s in self.relevant_sections]}
