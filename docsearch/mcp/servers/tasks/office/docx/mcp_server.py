'''
# Copyright 2025 Rowel Atienza. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

DOCX Reader MCP Server

Find the sections of a Word document most relevant to a keyword query.
The document is split into sections by heading level, every section is
scored against the query, and the top matches are returned with their
parent and sibling section titles.

Requires:
    pip install fastmcp python-docx beautifulsoup4

Core Tools:
1. docx-reader - Read and rank relevant sections of the configured DOCX file
'''

import os
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from pydantic import Field

from docsearch.lib import search as search_lib
from docsearch.lib.search import resolve_document_path, search_document

import logging
logging.basicConfig(level=logging.ERROR, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

mcp = FastMCP("DOCX Reader MCP Server")

# Source document location relative to the working directory
# (set via options['document_dir'] / options['document_name'] in run())
DOCUMENT_DIR = search_lib.DOCUMENT_DIR
DOCUMENT_NAME = search_lib.DOCUMENT_NAME

RELEVANT_SECTIONS_SCHEMA = {
    "type": "object",
    "properties": {
        "relevantSections": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "content": {"type": "string"},
                    "embedding": {"type": "string"},
                    "parent": {"type": "string"},
                    "neighbors": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["title", "content", "embedding", "neighbors"],
            },
        },
    },
    "required": ["relevantSections"],
}


# =============================================================================
# TOOL 1: DOCX READER
# =============================================================================

@mcp.tool(
    name="docx-reader",
    title="DOCX Reader Tool",
    description="""Read and find relevant sections from the DOCX file in the server's documents directory.

Args:
- query: Keyword search text (required, must not be empty). Section numbers
  such as "4" match the whole main section "4. ...".
- user_input: The user's original text (optional). Only used to detect the
  response language (Vietnamese or English).

Returns the top matching sections as text, plus structured content:
{relevantSections: [{title, content, embedding, parent, neighbors}]}
A strongly matching numbered section (e.g. "4.") also brings in its
sub-sections ("4.1", "4.2", ...), so more than 5 sections may be returned.""",
    output_schema=RELEVANT_SECTIONS_SCHEMA,
)
def docx_reader(
    query: Annotated[str, Field(description="Keyword search text, e.g. 'security requirements' or '4'")],
    user_input: Annotated[Optional[str], Field(description="Original user text used for language detection")] = None,
) -> ToolResult:
    document_path = resolve_document_path(DOCUMENT_DIR, DOCUMENT_NAME)
    result = search_document(query, user_input=user_input, document_path=document_path)
    return ToolResult(
        content=result.summary,
        structured_content=result.structured_content(),
    )


# =============================================================================
# SERVER ENTRY POINT
# =============================================================================

def run(
    transport: str = "streamable-http",
    host: str = "0.0.0.0",
    port: int = 3000,
    path: str = "/mcp",
    options: dict = {}
) -> None:
    """Run the MCP server."""
    global DOCUMENT_DIR, DOCUMENT_NAME

    level = logging.INFO if 'verbose' in options else logging.ERROR
    logger.setLevel(level)
    for name in ("docsearch.lib.search", "docsearch.lib.scoring",
                 "docsearch.lib.ranking", "docsearch.lib.response",
                 "docsearch.lib.converter"):
        logging.getLogger(name).setLevel(level)

    if 'document_dir' in options:
        DOCUMENT_DIR = options['document_dir']
    if 'document_name' in options:
        DOCUMENT_NAME = options['document_name']

    document_path = resolve_document_path(DOCUMENT_DIR, DOCUMENT_NAME)
    if not os.path.isfile(document_path):
        logger.warning(f"Source document not found yet: {document_path}")

    logger.info(f"Starting DOCX Reader MCP Server at {host}:{port}{path}")
    logger.info(f"Source document: {document_path}")
    logger.info("Available tools: docx-reader")

    if 'stdio' in transport:
        mcp.run(transport=transport)
        return

    quiet = 'verbose' not in options
    if quiet:
        import uvicorn.config
        uvicorn.config.LOGGING_CONFIG["loggers"]["uvicorn.access"]["level"] = "WARNING"
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.WARNING)

    mcp.run(transport=transport, host=host, port=port, path=path,
            uvicorn_config={"access_log": False, "log_level": "warning"} if quiet else {})

# =============================================================================
# SERVER STARTUP
# =============================================================================

if __name__ == "__main__":
    run()
