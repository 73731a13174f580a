"""Memory pressure handlers."""

import time
import logging
from typing import Optional

from pullparse.memory.monitor import (
    MemoryPressureHandler,
    MemoryPressureLevel,
    MemoryInfo
)


class LoggingHandler(MemoryPressureHandler):
    """Log memory pressure events."""

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 min_level: MemoryPressureLevel = MemoryPressureLevel.MEDIUM,
                 quiet_period: float = 60.0):
        self.logger = logger or logging.getLogger(__name__)
        self.min_level = min_level
        self.quiet_period = quiet_period
        self._last_log = {}

    def can_handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> bool:
        return level >= self.min_level

    def handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> None:
        # Only log if level changed or the quiet period passed
        last_time = self._last_log.get(level, 0)
        if level in self._last_log and time.time() - last_time < self.quiet_period:
            return

        self._last_log[level] = time.time()

        if level == MemoryPressureLevel.CRITICAL:
            self.logger.critical("CRITICAL memory pressure while buffering stream: %s", info)
        elif level == MemoryPressureLevel.HIGH:
            self.logger.error("HIGH memory pressure while buffering stream: %s", info)
        elif level == MemoryPressureLevel.MEDIUM:
            self.logger.warning("MEDIUM memory pressure while buffering stream: %s", info)
        else:
            self.logger.info("Memory pressure: %s", info)
