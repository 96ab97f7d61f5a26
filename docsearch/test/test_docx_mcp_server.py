"""Tests for the DOCX Reader MCP server — docx-reader tool and run()."""

import asyncio
import os
import sys
from unittest.mock import patch

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from fastmcp import Client
from fastmcp.exceptions import ToolError

import docsearch.mcp.servers.tasks.office.docx.mcp_server as docx_server


@pytest.fixture
def served_document(tmp_path, monkeypatch, requirements_docx):
    """Point the server at the requirements document inside a temp working dir."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(docx_server, "DOCUMENT_DIR", ".")
    monkeypatch.setattr(docx_server, "DOCUMENT_NAME", requirements_docx.name)
    return requirements_docx


def _call_tool(arguments):
    async def _call():
        async with Client(docx_server.mcp) as client:
            return await client.call_tool("docx-reader", arguments)
    return asyncio.run(_call())


def _list_tools():
    async def _list():
        async with Client(docx_server.mcp) as client:
            return await client.list_tools()
    return asyncio.run(_list())


# ── tool registration ───────────────────────────────────────────────────────

class TestToolRegistration:
    def test_single_tool(self):
        tools = _list_tools()
        assert [t.name for t in tools] == ["docx-reader"]

    def test_schemas(self):
        tool = _list_tools()[0]
        assert "query" in tool.inputSchema["properties"]
        assert "user_input" in tool.inputSchema["properties"]
        assert tool.inputSchema.get("required") == ["query"]
        assert "relevantSections" in tool.outputSchema["properties"]


# ── docx-reader ─────────────────────────────────────────────────────────────

class TestDocxReader:
    def test_returns_summary_and_structured_content(self, served_document):
        result = _call_tool({"query": "requirements"})
        text = result.content[0].text
        assert text.startswith('Found 6 relevant sections in the document "requirements.docx"')
        sections = result.structured_content["relevantSections"]
        assert [s["title"] for s in sections[:3]] == [
            "4. Requirements", "4.1 Performance", "4.2 Security",
        ]
        assert sections[1]["parent"] == "4. Requirements"
        assert all(s["embedding"] == "placeholder" for s in sections)

    def test_user_input_sets_language(self, served_document):
        result = _call_tool({"query": "security", "user_input": "Yêu cầu bảo mật"})
        assert result.content[0].text.startswith("Respond in Vietnamese")

    def test_empty_query_is_tool_error(self, served_document):
        with pytest.raises(ToolError, match="Query cannot be empty"):
            _call_tool({"query": "   "})

    def test_missing_document_is_tool_error(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(docx_server, "DOCUMENT_DIR", "documents")
        monkeypatch.setattr(docx_server, "DOCUMENT_NAME", "absent.docx")
        with pytest.raises(ToolError, match="absent.docx not found"):
            _call_tool({"query": "requirements"})


# ── run ─────────────────────────────────────────────────────────────────────

class TestRun:
    @pytest.fixture(autouse=True)
    def _restore_globals(self, monkeypatch):
        monkeypatch.setattr(docx_server, "DOCUMENT_DIR", docx_server.DOCUMENT_DIR)
        monkeypatch.setattr(docx_server, "DOCUMENT_NAME", docx_server.DOCUMENT_NAME)

    def test_options_override_document(self):
        with patch.object(docx_server.mcp, "run") as mcp_run:
            docx_server.run(options={"document_dir": "docs", "document_name": "x.docx"})
        assert docx_server.DOCUMENT_DIR == "docs"
        assert docx_server.DOCUMENT_NAME == "x.docx"
        mcp_run.assert_called_once()

    def test_http_transport_arguments(self):
        with patch.object(docx_server.mcp, "run") as mcp_run:
            docx_server.run(transport="streamable-http", host="127.0.0.1", port=3100, path="/mcp",
                            options={"verbose": True})
        kwargs = mcp_run.call_args.kwargs
        assert kwargs["transport"] == "streamable-http"
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 3100
        assert kwargs["path"] == "/mcp"
        assert kwargs["uvicorn_config"] == {}

    def test_quiet_by_default(self):
        with patch.object(docx_server.mcp, "run") as mcp_run:
            docx_server.run(options={})
        assert mcp_run.call_args.kwargs["uvicorn_config"] == {"access_log": False, "log_level": "warning"}

    def test_stdio_transport(self):
        with patch.object(docx_server.mcp, "run") as mcp_run:
            docx_server.run(transport="stdio")
        mcp_run.assert_called_once_with(transport="stdio")
