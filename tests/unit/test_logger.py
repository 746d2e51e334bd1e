"""
Unit tests for command-line logger setup.
"""

import sys

import pytest
from loguru import logger

from galley.contexts.layout import BlockGeometry, paginate
from galley.contexts.layout.logger import log_layout_result
from galley.utils.logger import session_log_dir, setup_logger


@pytest.fixture
def restore_loguru():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
class TestSetupLogger:
    """Tests for setup_logger() and its provenance header."""

    def test_session_log_dir_naming(self, tmp_path):
        log_dir = session_log_dir("migrate", logs_path=tmp_path)

        assert log_dir.parent == tmp_path
        assert log_dir.name.startswith("migrate_")

    def test_writes_provenance_and_context_messages(self, tmp_path, restore_loguru):
        log_file = setup_logger("layout", log_dir=tmp_path / "run", extra_provenance={"Page size": "a4"})

        log_layout_result(paginate([BlockGeometry(ordinal=0, top=500, bottom=1700)]))
        logger.remove()

        text = log_file.read_text(encoding="utf-8")
        assert log_file == tmp_path / "run" / "layout.log"
        assert "Page size: a4" in text
        assert "galley: " in text
        assert "[layout] Block 0 is taller than one page" in text
        assert "DEBUG" in text
