"""
Logging setup: loguru sinks plus the stdlib bridge.
"""

from .setup import InterceptHandler, configure_logging

__all__ = ["InterceptHandler", "configure_logging"]
