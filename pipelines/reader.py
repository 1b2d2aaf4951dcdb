"""Synchronous UTF-8 reader for the documentation source."""

import logging
import os
from dataclasses import dataclass

from .errors import DocumentNotFoundError, DocumentReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawContent:
    """Text of the document as read for a single render."""
    path: str
    text: str
    byte_length: int


def read_document(path: str, check_exists: bool = True) -> RawContent:
    """Read the whole file at ``path`` as strict UTF-8.

    Raises:
        DocumentNotFoundError: No regular file exists at ``path``
        DocumentReadError: The file could not be read or is not valid UTF-8
    """
    logger.info(f"Reading documentation file: {path}")

    if check_exists and not os.path.isfile(path):
        raise DocumentNotFoundError("Documentation file not found", path)

    try:
        with open(path, "rb") as f:
            data = f.read()
    except FileNotFoundError as e:
        raise DocumentNotFoundError("Documentation file not found", path, detail=str(e)) from e
    except IsADirectoryError as e:
        raise DocumentNotFoundError("Documentation path is not a file", path, detail=str(e)) from e
    except OSError as e:
        raise DocumentReadError("Documentation file could not be read", path, detail=str(e)) from e

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentReadError("Documentation file is not valid UTF-8", path, detail=str(e)) from e

    logger.info(f"Read {len(data)} bytes from {path}")
    return RawContent(path=path, text=text, byte_length=len(data))
