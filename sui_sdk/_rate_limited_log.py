"""
Thread-safe rate-limited logging.

A node that keeps returning the same odd reply (stray batch ids, coin objects
without a balance) would otherwise flood the log with identical warnings.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60

# One cache per interval so a short-interval caller can't evict a long one
_caches = {}
_caches_lock = threading.RLock()


def _cache_for(interval: int) -> TTLCache:
    with _caches_lock:
        cache = _caches.get(interval)
        if cache is None:
            cache = TTLCache(maxsize=256, ttl=interval)
            _caches[interval] = cache
        return cache


def rate_limited_log(
    message: str,
    level: str = "warning",
    interval: int = DEFAULT_INTERVAL,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message at most once per ``interval`` seconds.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        interval: Minimum interval between identical messages, in seconds
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)
    key = f"{log_instance.name}:{level}:{message}"

    cache = _cache_for(interval)
    with _caches_lock:
        if key in cache:
            return False
        cache[key] = True
    log_method(message)
    return True


def reset() -> None:
    """Forget every suppressed message."""
    with _caches_lock:
        _caches.clear()
