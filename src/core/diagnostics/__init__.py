"""
Diagnostics — диагностический логгер геометрического ядра.
"""

from src.core.diagnostics.logger import (
    DEFAULT_LOGGER_NAME,
    DiagnosticLogger,
    format_message,
    level_for,
    log_result,
)

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DiagnosticLogger",
    "format_message",
    "level_for",
    "log_result",
]
