"""
rediskit - Observability Module

Structured logging for the package.

Usage:
    from rediskit.observability import setup_logging

    setup_logging("DEBUG")
"""

from .logging import JSONFormatter, setup_logging

__all__ = [
    "JSONFormatter",
    "setup_logging",
]
