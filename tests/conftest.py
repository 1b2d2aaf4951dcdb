import logging
import os
import sys

import pytest

# Add the parent directory to the path so we can import the site packages
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

SETTINGS_ENV_VARS = [
    'DOCSITE_CONFIG',
    'DOCSITE_DOCS_PATH',
    'DOCSITE_RENDER_MODE',
    'DOCSITE_SHOW_PATH',
    'DOCSITE_CHECK_EXISTS',
    'DOCSITE_SITE_TITLE',
    'DOCSITE_SITE_DESCRIPTION',
    'DOCSITE_LANG',
    'DOCSITE_LOG_LEVEL',
    'DOCSITE_LOG_JSON',
    'DOCSITE_LOG_FILE',
    'DOCSITE_MARKDOWN_EXTENSIONS',
    'ENVIRONMENT',
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove settings variables that may leak in from the host."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def site_root(tmp_path, monkeypatch):
    """Run the test from an empty site directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_doc(site_root):
    """Write docs/main.md under the site root and return its path."""
    def _write(content, encoding="utf-8"):
        docs_dir = site_root / "docs"
        docs_dir.mkdir(exist_ok=True)
        doc = docs_dir / "main.md"
        if isinstance(content, bytes):
            doc.write_bytes(content)
        else:
            doc.write_text(content, encoding=encoding)
        return doc
    return _write


@pytest.fixture
def restore_root_logger():
    """Undo handler changes made by setup_logging."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
