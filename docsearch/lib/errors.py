'''

Exceptions raised by the document search pipeline.

They are raised synchronously and left for the calling layer (the MCP tool
wrapper or the CLI) to turn into a caller-visible failure.

'''


class DocSearchError(Exception):
    """Base class for document search errors."""


class EmptyQueryError(DocSearchError, ValueError):
    def __init__(self, message: str = "Query cannot be empty"):
        super().__init__(message)


class DocumentNotFoundError(DocSearchError, FileNotFoundError):
    def __init__(self, filename: str, directory: str):
        self.filename = filename
        self.directory = directory
        super().__init__(f"File {filename} not found in {directory}")

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedDocumentError(DocSearchError, ValueError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unsupported document type: {path}")
