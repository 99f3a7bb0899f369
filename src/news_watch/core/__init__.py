"""Core configuration and constants.

Import what you need from `news_watch.core.config` and
`news_watch.core.constants` to avoid heavy side effects at import time.
"""

__all__ = ["config", "constants", "settings"]
