"""Shared fixtures for the docsearch test suite."""

import os
import sys

import pytest

# Ensure the repository root is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from docsearch.type.sections import Section


# ---------------------------------------------------------------------------
# Requirements document used across the suite
# ---------------------------------------------------------------------------

# (heading level or 0 for a paragraph, text)
REQUIREMENTS_DOC = [
    (1, "1. Introduction"),
    (0, "This document describes the billing platform."),
    (1, "2. Scope"),
    (0, "The scope covers invoices and payments."),
    (1, "3. Users"),
    (0, "Administrators manage accounts."),
    (1, "4. Requirements"),
    (0, "All requirements below are mandatory."),
    (2, "4.1 Performance"),
    (0, "Pages load within two seconds."),
    (2, "4.2 Security"),
    (0, "Passwords are hashed."),
    (1, "5. Glossary"),
    (0, "Terms used in this document."),
    (1, "6. Appendix"),
]


@pytest.fixture
def requirements_blocks():
    return list(REQUIREMENTS_DOC)


@pytest.fixture
def make_html():
    """Factory rendering (level, text) blocks as hyper-text."""
    def _make(blocks):
        parts = []
        for level, text in blocks:
            tag = f"h{level}" if level else "p"
            parts.append(f"<{tag}>{text}</{tag}>")
        return "".join(parts)
    return _make


@pytest.fixture
def make_docx(tmp_path):
    """Factory writing (level, text) blocks to a .docx file with python-docx."""
    from docx import Document

    def _make(blocks, name="document.docx"):
        doc = Document()
        for level, text in blocks:
            if level:
                doc.add_heading(text, level=level)
            else:
                doc.add_paragraph(text)
        path = tmp_path / name
        doc.save(str(path))
        return path
    return _make


@pytest.fixture
def requirements_docx(make_docx, requirements_blocks):
    return make_docx(requirements_blocks, name="requirements.docx")


@pytest.fixture
def make_section():
    def _make(title, level=1, content="", index=0):
        return Section(level=level, title=title, content=content, index=index)
    return _make


@pytest.fixture
def requirements_sections():
    """Sections as extracted from REQUIREMENTS_DOC."""
    return [
        Section(1, "1. Introduction", "This document describes the billing platform.", 0),
        Section(1, "2. Scope", "The scope covers invoices and payments.", 1),
        Section(1, "3. Users", "Administrators manage accounts.", 2),
        Section(1, "4. Requirements",
                "All requirements below are mandatory.\n"
                "4.1 Performance\nPages load within two seconds.\n"
                "4.2 Security\nPasswords are hashed.", 3),
        Section(2, "4.1 Performance", "Pages load within two seconds.", 4),
        Section(2, "4.2 Security", "Passwords are hashed.", 5),
        Section(1, "5. Glossary", "Terms used in this document.", 6),
        Section(1, "6. Appendix", "", 7),
    ]
