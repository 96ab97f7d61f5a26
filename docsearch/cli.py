"""
CLI entry point for docsearch.

Usage:
    docsearch --query "security requirements"          # search the default document
    docsearch --query "4" --document requirements.docx --json  # structured output
    docsearch --serve                                  # start the MCP servers
    docsearch --serve --config my.yaml                 # custom server config
"""

import argparse
import json
import logging
import sys

from docsearch.lib.errors import DocSearchError
from docsearch.lib.search import search_document


def _run_query(query: str, user_input: str = None, document: str = None, as_json: bool = False) -> int:
    """Run one search and print the result. Returns the process exit status."""
    try:
        result = search_document(query, user_input=user_input, document_path=document)
    except DocSearchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(result.structured_content(), indent=2, ensure_ascii=False))
    else:
        print(result.summary)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="docsearch",
        description="Find the most relevant sections of a structured document.",
    )
    parser.add_argument('--query', type=str, default=None,
                        help='Keyword search text.')
    parser.add_argument('--user-input', type=str, default=None,
                        help='Original user text, used only to detect the response language.')
    parser.add_argument('--document', type=str, default=None,
                        help='Document to search (.docx or .html). Defaults to src/documents/[AIVIN] - BRD.docx.')
    parser.add_argument('--json', action='store_true', default=False,
                        help='Print the structured sections as JSON instead of the text summary.')
    parser.add_argument('--serve', action='store_true', default=False,
                        help='Start the MCP servers listed in the configuration.')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to the MCP server configuration YAML file.')
    parser.add_argument('--mcp-config', type=str, action='append', default=None,
                        help='Additional MCP server configuration file(s) to merge.')
    parser.add_argument('--log-level', default='ERROR',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set the logging level.')
    args = parser.parse_args(argv)

    level = getattr(logging, args.log_level)
    logging.getLogger().setLevel(level)
    logging.getLogger("docsearch").setLevel(level)

    if args.serve:
        from docsearch.mcp.servers.run import run_servers
        failed = run_servers(config_path=args.config, extra_configs=args.mcp_config, log_level=args.log_level)
        return 1 if failed else 0

    if args.query is None:
        parser.error("one of --query or --serve is required")

    return _run_query(args.query, user_input=args.user_input, document=args.document, as_json=args.json)


if __name__ == "__main__":
    sys.exit(main())
