"""Unit tests for session logger configuration."""

import pytest
from loguru import logger

from atsresume.api.logger import setup_api_logger
from atsresume.contexts.rendering.logger import setup_rendering_logger
from atsresume.utils.logger import setup_logger


@pytest.fixture(autouse=True)
def release_sinks():
    yield
    logger.remove()


@pytest.mark.unit
def test_session_file_records_provenance_and_debug(tmp_path):
    log_file = setup_logger(
        "template", tmp_path / "session", extra_provenance={"Phase": "compose"}
    )
    logger.debug("composed fragment")
    logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert log_file == tmp_path / "session" / "template.log"
    assert "Phase: compose" in text
    assert "Python:" in text
    assert "composed fragment" in text


@pytest.mark.unit
def test_console_level_filters_stdout(tmp_path, capsys):
    log_file = setup_logger("api", tmp_path, console_level="warning")
    logger.info("request served")
    logger.warning("metrics backend unavailable")
    logger.remove()

    out = capsys.readouterr().out
    assert "metrics backend unavailable" in out
    assert "request served" not in out
    assert "request served" in log_file.read_text(encoding="utf-8")


@pytest.mark.unit
def test_api_logger_uses_configured_console_level(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr("atsresume.api.logger.CONSOLE_LEVEL", "ERROR")

    setup_api_logger(tmp_path)
    logger.warning("slow export")
    logger.remove()

    assert "slow export" not in capsys.readouterr().out


@pytest.mark.unit
def test_rendering_logger_highlights_success(tmp_path):
    log_file = setup_rendering_logger(tmp_path)

    assert log_file.name == "render.log"
    assert logger.level("SUCCESS").color == "<bold><green>"
