"""
Tests for observability — logging setup + metrics.
"""

import logging

import pytest

from classjars.core.observability.logging_config import (
    resolve_level,
    setup_from_env,
    setup_logging,
)
from classjars.core.observability.metrics import MetricsRegistry, Timing, series


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flags_take_precedence(self):
        env = {"CLASSJARS_LOG_LEVEL": "ERROR"}
        assert resolve_level(debug=True, env=env) == "DEBUG"
        assert resolve_level(verbose=True, env=env) == "INFO"
        assert resolve_level(quiet=True, env={}) == "ERROR"

    def test_env_then_default(self):
        assert resolve_level(env={"CLASSJARS_LOG_LEVEL": "INFO"}) == "INFO"
        assert resolve_level(env={}) == "WARNING"


class TestSetupLogging:
    def test_console_level(self, restore_root_logger):
        setup_logging("INFO")
        assert restore_root_logger.level == logging.INFO
        assert len(restore_root_logger.handlers) == 1

    @pytest.mark.parametrize(
        "level, expected",
        [("DEBUG", "%(lineno)d"), ("INFO", "[%(name)s]"), ("ERROR", "%(message)s")],
    )
    def test_console_format_follows_level(self, restore_root_logger, level, expected):
        setup_logging(level)
        assert expected in restore_root_logger.handlers[0].formatter._fmt

    def test_unknown_level_falls_back(self, restore_root_logger):
        setup_logging("chatty")
        assert restore_root_logger.level == logging.WARNING

    def test_file_handler(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "classjars.log"
        level = setup_from_env(
            env={"CLASSJARS_LOG_FILE": str(log_file), "CLASSJARS_LOG_FILE_LEVEL": "DEBUG"},
        )
        assert level == "WARNING"
        assert restore_root_logger.level == logging.DEBUG
        logging.getLogger("classjars.test").debug("hello file")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()


class TestMetrics:
    def test_series_key(self):
        assert series("resolver.duration_ms") == "resolver.duration_ms"
        assert series("v", result="stale", reason="x") == "v{reason=x,result=stale}"

    def test_counts_by_label(self):
        reg = MetricsRegistry()
        reg.inc("resolver.strategy", strategy="full_scan")
        reg.inc("resolver.strategy", strategy="full_scan")
        reg.inc("resolver.strategy", strategy="render_jars")
        assert reg.count("resolver.strategy", strategy="full_scan") == 2
        assert reg.count("resolver.strategy", strategy="render_jars") == 1
        assert reg.count("resolver.strategy", strategy="query_sync") == 0
        assert reg.count("resolver.strategy") == 0

    def test_label_order_does_not_matter(self):
        reg = MetricsRegistry()
        reg.inc("staleness.verdict", result="stale", reason="unsaved_edits")
        assert reg.count("staleness.verdict", reason="unsaved_edits", result="stale") == 1

    def test_timing(self):
        timing = Timing()
        for ms in (3.0, 1.0, 2.0):
            timing.observe(ms)
        assert (timing.count, timing.total_ms, timing.slowest_ms, timing.mean_ms) == (3, 6.0, 3.0, 2.0)
        assert Timing().mean_ms == 0.0

    def test_timed_records_even_on_error(self):
        reg = MetricsRegistry()
        with reg.timed("resolver.duration_ms"):
            pass
        with pytest.raises(RuntimeError):
            with reg.timed("resolver.duration_ms"):
                raise RuntimeError("boom")
        assert reg.timing("resolver.duration_ms").count == 2

    def test_snapshot_and_reset(self):
        reg = MetricsRegistry()
        reg.inc("resolver.strategy", strategy="no_snapshot")
        with reg.timed("resolver.duration_ms"):
            pass
        snap = reg.snapshot()
        assert snap["counts"] == {"resolver.strategy{strategy=no_snapshot}": 1}
        assert snap["timings"]["resolver.duration_ms"]["count"] == 1
        reg.reset()
        assert reg.snapshot() == {"counts": {}, "timings": {}}
