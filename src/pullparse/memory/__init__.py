"""Memory monitoring for operations that buffer stream elements."""

from pullparse.memory.monitor import (
    MemoryMonitor,
    MemoryPressureLevel,
    MemoryInfo,
    MemoryPressureHandler,
    monitor,
)
from pullparse.memory.handlers import LoggingHandler

# Default: report pressure through the logging module
monitor.add_handler(LoggingHandler())

__all__ = [
    "MemoryMonitor",
    "MemoryPressureLevel",
    "MemoryInfo",
    "MemoryPressureHandler",
    "LoggingHandler",
    "monitor",
]
