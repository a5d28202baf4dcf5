"""
Unit tests for logging helpers.
"""

import logging
import pytest
from queue import Queue

from encore_export.utils.logging_utils import (
    PACKAGE_LOGGER,
    QueueLogHandler,
    attach_queue_handler,
    configure_logging,
    detach_queue_handler,
)


@pytest.fixture
def restore_package_level():
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    yield
    logger.setLevel(level)


class TestQueueLogHandler:
    """Tests for QueueLogHandler."""

    def test_when_record_emitted_then_message_and_level_queued(self):
        queue = Queue()
        handler = QueueLogHandler(queue)
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "Poster missing", None, None)

        handler.emit(record)

        assert queue.get_nowait() == ("Poster missing", "WARNING")

    def test_when_debug_record_then_reported_as_info(self):
        queue = Queue()
        handler = QueueLogHandler(queue, level=logging.DEBUG)
        record = logging.LogRecord("x", logging.DEBUG, __file__, 1, "detail", None, None)

        handler.emit(record)

        assert queue.get_nowait() == ("detail", "INFO")


class TestAttachQueueHandler:
    """Tests for attach/detach helpers."""

    def test_when_attached_then_package_logs_forwarded(self, restore_package_level):
        queue = Queue()
        handler = attach_queue_handler(queue)
        try:
            logging.getLogger("encore_export.export.controller").info("Export started")
        finally:
            detach_queue_handler(handler)

        assert ("Export started", "INFO") in list(queue.queue)

    def test_when_detached_then_no_longer_forwarded(self, restore_package_level):
        queue = Queue()
        handler = attach_queue_handler(queue)
        detach_queue_handler(handler)

        logging.getLogger("encore_export.store").warning("ignored")

        assert queue.empty()


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_when_level_name_then_package_level_set(self, restore_package_level):
        configure_logging("debug")

        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG

    def test_when_unknown_level_then_raises(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("chatty")
