import logging

import pytest

from pipelines.errors import DocumentNotFoundError, DocumentReadError
from pipelines.reader import RawContent, read_document


def test_reads_utf8_text(tmp_path):
    doc = tmp_path / "main.md"
    doc.write_text("# Título\n\nDocumentación 文档", encoding="utf-8")

    raw = read_document(str(doc))

    assert isinstance(raw, RawContent)
    assert raw.text == "# Título\n\nDocumentación 文档"
    assert raw.path == str(doc)
    assert raw.byte_length == len("# Título\n\nDocumentación 文档".encode("utf-8"))


def test_empty_file(tmp_path):
    doc = tmp_path / "main.md"
    doc.write_text("", encoding="utf-8")
    raw = read_document(str(doc))
    assert raw.text == ""
    assert raw.byte_length == 0


def test_missing_file_raises_not_found(tmp_path):
    path = str(tmp_path / "docs" / "main.md")
    with pytest.raises(DocumentNotFoundError) as exc_info:
        read_document(path)
    assert exc_info.value.path == path
    assert exc_info.value.kind == "not_found"
    assert exc_info.value.stage == "reading"


def test_missing_file_without_existence_check(tmp_path):
    """The open itself still reports a missing file as not found."""
    path = str(tmp_path / "main.md")
    with pytest.raises(DocumentNotFoundError) as exc_info:
        read_document(path, check_exists=False)
    assert path in exc_info.value.detail


def test_directory_is_not_a_document(tmp_path):
    with pytest.raises(DocumentNotFoundError):
        read_document(str(tmp_path))
    with pytest.raises(DocumentNotFoundError):
        read_document(str(tmp_path), check_exists=False)


def test_invalid_utf8_is_read_failure(tmp_path):
    doc = tmp_path / "main.md"
    doc.write_bytes(b"# Title\n\xff\xfe\xfa broken")

    with pytest.raises(DocumentReadError) as exc_info:
        read_document(str(doc))
    assert exc_info.value.kind == "read_failure"
    assert "utf-8" in exc_info.value.detail.lower()


def test_os_error_is_read_failure(tmp_path, monkeypatch):
    doc = tmp_path / "main.md"
    doc.write_text("content", encoding="utf-8")

    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied", str(doc))

    monkeypatch.setattr("pipelines.reader.open", denied, raising=False)

    with pytest.raises(DocumentReadError) as exc_info:
        read_document(str(doc))
    assert "Permission denied" in exc_info.value.detail


def test_logs_path_and_length(tmp_path, caplog):
    doc = tmp_path / "main.md"
    doc.write_text("hello", encoding="utf-8")

    with caplog.at_level(logging.INFO, logger="pipelines.reader"):
        read_document(str(doc))

    messages = [r.getMessage() for r in caplog.records]
    assert any(str(doc) in m and "Reading" in m for m in messages)
    assert any("Read 5 bytes" in m for m in messages)


def test_logs_attempted_path_when_missing(tmp_path, caplog):
    path = str(tmp_path / "docs" / "main.md")
    with caplog.at_level(logging.INFO, logger="pipelines.reader"):
        with pytest.raises(DocumentNotFoundError):
            read_document(path)
    assert any(path in r.getMessage() for r in caplog.records)
