"""
Tests for the shared rate-limited logging implementation.
"""
import threading
from unittest.mock import patch, MagicMock

from cachetools import TTLCache

import circular_enterprise_apis.gateway._rate_limited_log as rll
from circular_enterprise_apis.gateway._rate_limited_log import rate_limited_log, reset_rate_limits


class TestRateLimitedLog:
    """Tests for the rate-limited logging implementation."""

    def test_repeat_is_suppressed(self):
        mock_logger = MagicMock()

        assert rate_limited_log("Test message", logger_instance=mock_logger) is True
        mock_logger.warning.assert_called_once_with("Test message")

        mock_logger.reset_mock()
        assert rate_limited_log("Test message", logger_instance=mock_logger) is False
        mock_logger.warning.assert_not_called()

    def test_level_and_message_are_part_of_key(self):
        mock_logger = MagicMock()

        rate_limited_log("Test message", level="warning", logger_instance=mock_logger)
        assert rate_limited_log("Test message", level="error", logger_instance=mock_logger) is True
        mock_logger.error.assert_called_once_with("Test message")

        assert rate_limited_log("Other message", level="warning", logger_instance=mock_logger) is True

    def test_unknown_level_falls_back_to_warning(self):
        mock_logger = MagicMock(spec=["warning"])
        rate_limited_log("odd level", level="verbose", logger_instance=mock_logger)
        mock_logger.warning.assert_called_once_with("odd level")

    def test_entries_expire_after_interval(self):
        now = [0.0]
        cache = TTLCache(maxsize=100, ttl=60, timer=lambda: now[0])
        mock_logger = MagicMock()

        with patch.dict(rll._caches, {60: cache}):
            assert rate_limited_log("expiring", interval=60, logger_instance=mock_logger)
            assert not rate_limited_log("expiring", interval=60, logger_instance=mock_logger)
            now[0] = 61.0
            assert rate_limited_log("expiring", interval=60, logger_instance=mock_logger)

        assert mock_logger.warning.call_count == 2

    def test_reset(self):
        mock_logger = MagicMock()
        rate_limited_log("reset me", logger_instance=mock_logger)
        reset_rate_limits()
        assert rate_limited_log("reset me", logger_instance=mock_logger) is True

    def test_concurrent_callers_log_once(self):
        mock_logger = MagicMock()
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(rate_limited_log("contended", logger_instance=mock_logger))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
        mock_logger.warning.assert_called_once_with("contended")
