"""Unit tests for the shared loguru setup."""

import sys

import pytest
from loguru import logger

from resume_improver.utils.logger import setup_logger


@pytest.fixture
def restore_loguru():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_run_log_has_provenance_and_debug_lines(tmp_path, restore_loguru):
    log_dir = tmp_path / "analyze_20261019_120000"

    log_file = setup_logger("analyze", log_dir, extra_provenance={"Strategy": "json"})
    logger.debug("[analysis] only in the file")
    logger.remove()

    assert log_file == log_dir / "analyze.log"
    text = log_file.read_text(encoding="utf-8")
    assert "Working directory:" in text
    assert "Strategy: json" in text
    assert "[analysis] only in the file" in text
