import io
import json
import logging

from observability.logging import (
    ColoredFormatter,
    JSONFormatter,
    get_structured_logger,
    setup_logging
)


def _record(**extra):
    record = logging.makeLogRecord({
        "name": "pipelines.reader",
        "levelname": "ERROR",
        "levelno": logging.ERROR,
        "msg": "Failed to read %s",
        "args": ("/site/docs/main.md",),
    })
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields():
    entry = json.loads(JSONFormatter("docsite").format(_record(ctx_stage="reading")))

    assert entry["message"] == "Failed to read /site/docs/main.md"
    assert entry["level"] == "ERROR"
    assert entry["logger"] == "pipelines.reader"
    assert entry["service"] == "docsite"
    assert entry["ctx_stage"] == "reading"
    assert entry["timestamp"].endswith("+00:00")


def test_colored_formatter_plain():
    line = ColoredFormatter(use_colors=False).format(_record(ctx_path="/site/docs/main.md"))

    assert "ERROR" in line
    assert "Failed to read /site/docs/main.md" in line
    assert "path=/site/docs/main.md" in line
    assert "\033[" not in line


def test_colored_formatter_colors():
    line = ColoredFormatter(use_colors=True).format(_record())
    assert line.startswith("\033[31m")
    assert line.endswith("\033[0m")


def test_setup_logging_console(restore_root_logger):
    stream = io.StringIO()
    setup_logging(level="DEBUG", use_colors=False, stream=stream)

    logging.getLogger("docsite.test").debug("hello console")

    assert restore_root_logger.level == logging.DEBUG
    assert "hello console" in stream.getvalue()


def test_setup_logging_json_console(restore_root_logger):
    stream = io.StringIO()
    setup_logging(level="INFO", use_json=True, stream=stream)

    logging.getLogger("docsite.test").info("structured")

    entry = json.loads(stream.getvalue().strip())
    assert entry["message"] == "structured"


def test_setup_logging_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "docsite.log"
    setup_logging(level="INFO", log_file=str(log_file), stream=io.StringIO())

    logging.getLogger("docsite.test").warning("to file")
    for handler in restore_root_logger.handlers:
        handler.flush()

    entry = json.loads(log_file.read_text(encoding="utf-8").strip())
    assert entry["message"] == "to file"
    assert entry["level"] == "WARNING"


def test_setup_logging_ignores_unknown_level(restore_root_logger):
    setup_logging(level="chatty", stream=io.StringIO())
    assert restore_root_logger.level == logging.INFO


def test_structured_logger_context(caplog):
    log = get_structured_logger("docsite.test", component="page_composer")

    with caplog.at_level(logging.INFO, logger="docsite.test"):
        log.info("rendered", path="/site/docs/main.md", bytes=42)

    record = caplog.records[-1]
    assert record.getMessage() == "rendered"
    assert record.ctx_component == "page_composer"
    assert record.ctx_path == "/site/docs/main.md"
    assert record.ctx_bytes == 42
