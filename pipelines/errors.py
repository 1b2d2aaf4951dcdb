"""Failure taxonomy for the document pipeline."""

from typing import Optional


class DocumentError(Exception):
    """Base class for failures while loading or rendering the document.

    Attributes:
        path: The attempted document path
        stage: Pipeline stage that failed (``reading`` or ``rendering``)
        kind: Stable machine name for the failure
        detail: Underlying error message
    """

    kind = "document_error"
    stage = "reading"

    def __init__(self, message: str, path: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.detail = detail or message

    def __str__(self) -> str:
        return f"{self.message} ({self.path})"


class DocumentNotFoundError(DocumentError):
    """The source file is absent at the resolved path."""
    kind = "not_found"
    stage = "reading"


class DocumentReadError(DocumentError):
    """The file exists but could not be fully read or decoded."""
    kind = "read_failure"
    stage = "reading"


class DocumentCompileError(DocumentError):
    """Front-matter or markdown could not be compiled.

    ``line`` is the 1-based line in the source text when known.
    """
    kind = "compile_failure"
    stage = "rendering"

    def __init__(self, message: str, path: str = "", detail: Optional[str] = None,
                 line: Optional[int] = None):
        super().__init__(message, path, detail)
        self.line = line
