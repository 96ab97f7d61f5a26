'''

Document to markup conversion.

A .docx file is rendered into simple hyper-text (h1..h6, p, table), one
block per line, with python-docx, then parsed with BeautifulSoup and
flattened into an ordered list of MarkupNode blocks that the section
extractor walks by index. Text is taken as-is from each block, so inline
markup such as H<sub>2</sub>O reads "H2O".

'''

import html
import io
import os
import re
from typing import List

from bs4 import BeautifulSoup, Tag
from docx import Document
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

import logging
logging.basicConfig(level=logging.ERROR, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from docsearch.lib.errors import UnsupportedDocumentError
from docsearch.type.sections import MarkupDocument, MarkupNode

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
HEADING_STYLE = re.compile(r'^Heading ([1-6])$')
CONTAINER_TAGS = {"div", "section", "article", "main", "body", "html"}


def _heading_level(paragraph: Paragraph) -> int:
    style = paragraph.style
    if style is None or not style.name:
        return 0
    match = HEADING_STYLE.match(style.name)
    return int(match.group(1)) if match else 0


def _render_paragraph(paragraph: Paragraph) -> str:
    text = paragraph.text.strip()
    if not text:
        return ""
    level = _heading_level(paragraph)
    tag = f"h{level}" if level else "p"
    return f"<{tag}>{html.escape(text)}</{tag}>"


def _render_table(table: Table) -> str:
    rows = []
    for row in table.rows:
        # whitespace between cells keeps them apart in the extracted text
        cells = " ".join(f"<td>{html.escape(cell.text.strip())}</td>" for cell in row.cells)
        rows.append(f"<tr>{cells}</tr>")
    if not rows:
        return ""
    return "<table>" + "\n".join(rows) + "</table>"


def docx_to_html(buffer: bytes) -> str:
    """Render a .docx buffer as hyper-text, keeping paragraphs and tables in body order."""
    doc = Document(io.BytesIO(buffer))
    parts = []
    for child in doc.element.body.iterchildren():
        if child.tag == qn('w:p'):
            rendered = _render_paragraph(Paragraph(child, doc))
        elif child.tag == qn('w:tbl'):
            rendered = _render_table(Table(child, doc))
        else:
            continue
        if rendered:
            parts.append(rendered)
    return "\n".join(parts)


def _flatten(parent: Tag, nodes: List[MarkupNode]) -> None:
    for child in parent.children:
        if not isinstance(child, Tag):
            continue
        if child.name in HEADING_TAGS:
            nodes.append(MarkupNode(level=int(child.name[1]), text=child.get_text().strip()))
        elif child.name in CONTAINER_TAGS and child.find(HEADING_TAGS):
            _flatten(child, nodes)
        else:
            nodes.append(MarkupNode(level=0, text=child.get_text().strip()))


def parse_markup(markup: str) -> MarkupDocument:
    """Parse hyper-text into a flat, document-ordered node list plus the whole body text."""
    soup = BeautifulSoup(markup, "html.parser")
    root = soup.body or soup
    nodes: List[MarkupNode] = []
    _flatten(root, nodes)
    return MarkupDocument(nodes=nodes, text=root.get_text().strip())


def load_markup(path: str) -> MarkupDocument:
    """Read a document from disk and convert it to a MarkupDocument."""
    ext = os.path.splitext(path)[1].lower()
    if ext == '.docx':
        with open(path, 'rb') as f:
            buffer = f.read()
        markup = docx_to_html(buffer)
    elif ext in ('.html', '.htm'):
        with open(path, 'r', encoding='utf-8') as f:
            markup = f.read()
    else:
        raise UnsupportedDocumentError(path)
    logger.info(f"Converted {os.path.basename(path)} to {len(markup)} chars of markup")
    return parse_markup(markup)
