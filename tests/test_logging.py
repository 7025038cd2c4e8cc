"""Tests for the environment audit log.

The logger records structured entries for environment mutations and
loader decisions, so a test can check what changed and why.
"""

from py_env.env import Environment
from py_env.logging import LogEntry, Logger, LogLevel

_CAPACITY = 2


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry should store level, message, and source."""
        entry = LogEntry(level=LogLevel.INFO, message="loaded", source="load")
        assert entry.level is LogLevel.INFO
        assert entry.message == "loaded"
        assert entry.source == "load"

    def test_entry_str(self) -> None:
        """String representation should be ``[LEVEL] source: message``."""
        entry = LogEntry(level=LogLevel.WARNING, message="file missing", source="load")
        assert str(entry) == "[WARNING] load: file missing"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries(self) -> None:
        """Logged entries should be retrievable."""
        logger = Logger()
        logger.log(LogLevel.INFO, "set HOME", source="env")
        assert len(logger) == 1
        assert logger.entries[0].message == "set HOME"

    def test_entries_are_ordered(self) -> None:
        """Entries should be in chronological order."""
        logger = Logger()
        logger.info("first", source="test")
        logger.info("second", source="test")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_level_helpers(self) -> None:
        """debug/info/error should log at their own level."""
        logger = Logger()
        logger.debug("d", source="test")
        logger.info("i", source="test")
        logger.error("e", source="test")
        assert [e.level for e in logger.entries] == [LogLevel.DEBUG, LogLevel.INFO, LogLevel.ERROR]

    def test_filter_by_level(self) -> None:
        """Filtering should return only entries at or above the level."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "debug msg", source="test")
        logger.log(LogLevel.INFO, "info msg", source="test")
        logger.log(LogLevel.ERROR, "error msg", source="test")
        warnings_and_above = logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings_and_above) == 1
        assert warnings_and_above[0].level is LogLevel.ERROR

    def test_filter_by_source(self) -> None:
        """Filtering by source should return matching entries."""
        logger = Logger()
        logger.info("set X", source="env")
        logger.info("loaded .env", source="load")
        load_logs = logger.filter(source="load")
        assert len(load_logs) == 1
        assert load_logs[0].source == "load"

    def test_filter_returns_a_copy(self) -> None:
        """Mutating a filter result should not touch the log."""
        logger = Logger()
        logger.info("x", source="test")
        logger.filter().clear()
        assert len(logger) == 1

    def test_clear(self) -> None:
        """Clearing should remove all entries."""
        logger = Logger()
        logger.info("test", source="test")
        logger.clear()
        assert logger.entries == []

    def test_unbounded_by_default(self) -> None:
        """Without a capacity the logger keeps everything."""
        assert Logger().capacity is None

    def test_capacity_drops_oldest(self) -> None:
        """Once full, the oldest entries should be dropped first."""
        logger = Logger(capacity=_CAPACITY)
        for message in ("a", "b", "c"):
            logger.info(message, source="test")
        assert [e.message for e in logger.entries] == ["b", "c"]


class TestEnvironmentLogging:
    """Verify that environments record their mutations."""

    def test_set_is_logged(self) -> None:
        """Setting a variable should produce a DEBUG entry."""
        env = Environment.isolated()
        env.set("GREETING", "hello")
        entries = env.logger.filter(source="env")
        assert [e.message for e in entries] == ["set GREETING"]
        assert entries[0].level is LogLevel.DEBUG

    def test_values_are_not_logged(self) -> None:
        """Values may be secrets; only names should appear in the log."""
        env = Environment.isolated()
        env.set("TOKEN", "s3cret")
        assert all("s3cret" not in e.message for e in env.logger.entries)

    def test_unset_of_missing_variable_is_not_logged(self) -> None:
        """Unsetting a variable that is not set should log nothing."""
        env = Environment.isolated()
        env.unset("NOPE")
        assert env.logger.entries == []

    def test_shared_logger(self) -> None:
        """Environments given the same logger should share one trail."""
        logger = Logger()
        first = Environment.isolated(logger=logger)
        second = Environment.isolated(logger=logger)
        first.set("A", "1")
        second.set("B", "2")
        assert [e.message for e in logger.entries] == ["set A", "set B"]
