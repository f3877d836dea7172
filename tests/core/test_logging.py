"""
Tests for loguru sink setup.
"""
import pytest
from loguru import logger

from collectionkit.collection.models import ListCollection
from collectionkit.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()


def test_console_only(tmp_path):
    handler_ids = setup_logging(debug_mode=False)
    assert len(handler_ids) == 1
    assert list(tmp_path.iterdir()) == []


def test_file_sink_keeps_engine_records(tmp_path):
    log_dir = tmp_path / "logs"
    handler_ids = setup_logging(debug_mode=True, log_dir=str(log_dir))
    assert len(handler_ids) == 2

    ListCollection.from_records(["a", "a"], key_extractor=lambda k: k)
    logger.info("host message")
    logger.remove()

    files = list(log_dir.glob("collection_*.log"))
    assert len(files) == 1
    text = files[0].read_text(encoding="utf-8")
    assert "Logging initialized." in text
    assert "duplicate key 'a' ignored" in text
    assert "host message" not in text


def test_keep_existing_handlers(tmp_path):
    records = []
    sink_id = logger.add(records.append, level="DEBUG")
    setup_logging(replace_handlers=False)
    assert any("Logging initialized." in str(record) for record in records)
    logger.remove(sink_id)
