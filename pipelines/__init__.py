"""Pipelines package for docsite.

Provides the document loading and rendering stages.
"""

from .errors import (
    DocumentError,
    DocumentNotFoundError,
    DocumentReadError,
    DocumentCompileError
)
from .locator import resolve_document_path, DEFAULT_RELATIVE_PATH
from .reader import RawContent, read_document
from .renderer import (
    RenderedContent,
    split_front_matter,
    check_markup_balance,
    build_markdown,
    render_markdown,
    render_verbatim
)

__all__ = [
    # Errors
    'DocumentError',
    'DocumentNotFoundError',
    'DocumentReadError',
    'DocumentCompileError',
    
    # Locator
    'resolve_document_path',
    'DEFAULT_RELATIVE_PATH',
    
    # Reader
    'RawContent',
    'read_document',
    
    # Renderer
    'RenderedContent',
    'split_front_matter',
    'check_markup_balance',
    'build_markdown',
    'render_markdown',
    'render_verbatim'
]
