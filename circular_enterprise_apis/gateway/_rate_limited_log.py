"""
Thread-safe rate-limited logging utilities.

Used by the outcome poller so that a gateway that keeps failing for the
whole polling window produces one log line per interval, not one per tick.
"""
import logging
import threading
from typing import Dict, Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

# One cache per suppression interval; entries expire after that many seconds
_caches: Dict[int, TTLCache] = {}
_lock = threading.RLock()


def _cache_for(interval: int) -> TTLCache:
    cache = _caches.get(interval)
    if cache is None:
        cache = TTLCache(maxsize=100, ttl=interval)
        _caches[interval] = cache
    return cache


def rate_limited_log(
    message: str,
    level: str = "warning",
    interval: int = 60,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message at most once per interval.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        interval: Suppression window in seconds
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)
    key = f"{level}:{message}"

    with _lock:
        cache = _cache_for(interval)
        if key in cache:
            return False
        cache[key] = True

    log_method(message)
    return True


def reset_rate_limits() -> None:
    """Forget every suppressed message."""
    with _lock:
        for cache in _caches.values():
            cache.clear()
