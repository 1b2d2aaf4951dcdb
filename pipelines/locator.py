"""Resolve the on-disk location of the documentation source."""

import os
from typing import Optional

DEFAULT_RELATIVE_PATH = os.path.join("docs", "main.md")


def resolve_document_path(cwd: Optional[str] = None,
                          relative_path: str = DEFAULT_RELATIVE_PATH) -> str:
    """Join ``relative_path`` onto the working directory and normalize it.

    No filesystem access happens here. An absolute ``relative_path`` is
    returned normalized, ignoring ``cwd``.
    """
    base = os.path.abspath(cwd if cwd is not None else os.getcwd())
    return os.path.normpath(os.path.join(base, relative_path))
