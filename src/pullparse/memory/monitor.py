"""Memory pressure checks for parsers that buffer stream elements."""

import psutil
from enum import IntEnum
from typing import List, Optional
from dataclasses import dataclass
from abc import ABC, abstractmethod

from pullparse.config import config


class MemoryPressureLevel(IntEnum):
    """Memory pressure levels."""
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


# Lowest percentage of the memory limit in use at which each level starts
PRESSURE_THRESHOLDS = (
    (95.0, MemoryPressureLevel.CRITICAL),
    (85.0, MemoryPressureLevel.HIGH),
    (70.0, MemoryPressureLevel.MEDIUM),
    (50.0, MemoryPressureLevel.LOW),
)


def pressure_level(percent: float) -> MemoryPressureLevel:
    """Map a usage percentage to a pressure level."""
    for threshold, level in PRESSURE_THRESHOLDS:
        if percent >= threshold:
            return level
    return MemoryPressureLevel.NONE


@dataclass
class MemoryInfo:
    """Memory usage seen while ``buffered`` stream elements were held."""
    total: int
    used: int
    percent: float
    pressure_level: MemoryPressureLevel
    buffered: int = 0

    def __str__(self) -> str:
        return (f"{self.buffered} elements buffered, "
                f"memory {self.percent:.1f}% used "
                f"({config.format_bytes(self.used)}/{config.format_bytes(self.total)}), "
                f"pressure {self.pressure_level.name}")


class MemoryPressureHandler(ABC):
    """Abstract base class for memory pressure handlers."""

    @abstractmethod
    def can_handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> bool:
        """Check if this handler should handle the given pressure level."""
        pass

    @abstractmethod
    def handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> None:
        """Handle memory pressure."""
        pass


class MemoryMonitor:
    """Sample system memory and report pressure to handlers.

    Parsing code that buffers elements (``ParserState.draw_all``) calls
    :meth:`check_memory_pressure` with the size of its buffer; nothing runs
    in the background.
    """

    def __init__(self, memory_limit: Optional[int] = None):
        """
        Initialize memory monitor.

        Args:
            memory_limit: Custom memory limit in bytes (None for configured limit)
        """
        self._memory_limit = memory_limit
        self.handlers: List[MemoryPressureHandler] = []

    @property
    def memory_limit(self) -> int:
        return self._memory_limit or config.memory_limit

    def add_handler(self, handler: MemoryPressureHandler) -> None:
        """Add a memory pressure handler."""
        self.handlers.append(handler)

    def get_memory_info(self, buffered: int = 0) -> MemoryInfo:
        """Get current memory information."""
        mem = psutil.virtual_memory()

        # Use configured limit if lower than system memory
        total = min(mem.total, self.memory_limit)
        percent = (mem.used / total) * 100

        return MemoryInfo(
            total=total,
            used=mem.used,
            percent=percent,
            pressure_level=pressure_level(percent),
            buffered=buffered,
        )

    def check_memory_pressure(self, buffered: int = 0) -> MemoryPressureLevel:
        """Check memory pressure while ``buffered`` elements are held and notify handlers."""
        info = self.get_memory_info(buffered)

        for handler in self.handlers:
            if handler.can_handle(info.pressure_level, info):
                handler.handle(info.pressure_level, info)

        return info.pressure_level


# Global monitor instance
monitor = MemoryMonitor()
