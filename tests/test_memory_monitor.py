#!/usr/bin/env python3
"""
Tests for configuration and memory pressure reporting.
"""

import logging
import unittest
from unittest import mock

from pullparse import ParseConfig, MemoryMonitor, MemoryPressureLevel
from pullparse.memory import LoggingHandler
from pullparse.memory.monitor import pressure_level


def fake_memory(total, used):
    return mock.Mock(total=total, used=used)


class TestParseConfig(unittest.TestCase):
    """Test configuration defaults."""

    def setUp(self):
        self.config = ParseConfig.get_instance()
        self._chunk_size = self.config.default_chunk_size

    def tearDown(self):
        ParseConfig.set_defaults(default_chunk_size=self._chunk_size)

    def test_singleton(self):
        self.assertIs(ParseConfig.get_instance(), self.config)

    def test_set_defaults_ignores_unknown_keys(self):
        ParseConfig.set_defaults(default_chunk_size=7, no_such_option=True)
        self.assertEqual(self.config.default_chunk_size, 7)
        self.assertFalse(hasattr(self.config, "no_such_option"))

    def test_resolve_chunk_size(self):
        ParseConfig.set_defaults(default_chunk_size=12)
        self.assertEqual(self.config.resolve_chunk_size(), 12)
        self.assertEqual(self.config.resolve_chunk_size(3), 3)

    def test_format_bytes(self):
        self.assertEqual(self.config.format_bytes(512), "512.00 B")
        self.assertEqual(self.config.format_bytes(2048), "2.00 KB")


class TestMemoryMonitor(unittest.TestCase):
    """Test pressure levels and handler notification."""

    def test_pressure_levels(self):
        monitor = MemoryMonitor(memory_limit=1000)
        cases = [
            (100, MemoryPressureLevel.NONE),
            (600, MemoryPressureLevel.LOW),
            (750, MemoryPressureLevel.MEDIUM),
            (900, MemoryPressureLevel.HIGH),
            (990, MemoryPressureLevel.CRITICAL),
        ]
        for used, level in cases:
            with mock.patch("psutil.virtual_memory", return_value=fake_memory(10_000, used)):
                info = monitor.get_memory_info()
            self.assertEqual(info.total, 1000)
            self.assertEqual(info.pressure_level, level)

    def test_level_ordering(self):
        self.assertTrue(MemoryPressureLevel.HIGH > MemoryPressureLevel.MEDIUM)
        self.assertTrue(MemoryPressureLevel.LOW >= MemoryPressureLevel.LOW)
        self.assertEqual(max(MemoryPressureLevel.LOW, MemoryPressureLevel.CRITICAL),
                         MemoryPressureLevel.CRITICAL)

    def test_threshold_boundaries(self):
        self.assertEqual(pressure_level(49.9), MemoryPressureLevel.NONE)
        self.assertEqual(pressure_level(50.0), MemoryPressureLevel.LOW)
        self.assertEqual(pressure_level(85.0), MemoryPressureLevel.HIGH)
        self.assertEqual(pressure_level(100.0), MemoryPressureLevel.CRITICAL)

    def test_handlers_notified(self):
        monitor = MemoryMonitor(memory_limit=1000)
        handler = mock.Mock()
        handler.can_handle.return_value = True
        monitor.add_handler(handler)
        with mock.patch("psutil.virtual_memory", return_value=fake_memory(1000, 900)):
            level = monitor.check_memory_pressure(buffered=4096)
        self.assertEqual(level, MemoryPressureLevel.HIGH)
        handler.handle.assert_called_once()
        called_level, info = handler.handle.call_args[0]
        self.assertEqual(called_level, MemoryPressureLevel.HIGH)
        self.assertEqual(info.buffered, 4096)
        self.assertIn("4096 elements buffered", str(info))

    def test_handler_may_decline(self):
        monitor = MemoryMonitor(memory_limit=1000)
        handler = mock.Mock()
        handler.can_handle.return_value = False
        monitor.add_handler(handler)
        with mock.patch("psutil.virtual_memory", return_value=fake_memory(1000, 900)):
            monitor.check_memory_pressure()
        handler.handle.assert_not_called()


class TestLoggingHandler(unittest.TestCase):
    """Test logging of pressure events."""

    def test_logs_and_rate_limits(self):
        logger = logging.getLogger("pullparse.tests.memory")
        monitor = MemoryMonitor(memory_limit=1000)
        monitor.add_handler(LoggingHandler(logger=logger))

        with mock.patch("psutil.virtual_memory", return_value=fake_memory(1000, 900)):
            with self.assertLogs(logger, level="ERROR") as logs:
                monitor.check_memory_pressure(buffered=20_000)
                monitor.check_memory_pressure(buffered=30_000)
        self.assertEqual(len(logs.records), 1)
        self.assertIn("HIGH memory pressure", logs.output[0])
        self.assertIn("20000 elements buffered", logs.output[0])

    def test_below_min_level_is_ignored(self):
        handler = LoggingHandler(min_level=MemoryPressureLevel.HIGH)
        self.assertFalse(handler.can_handle(MemoryPressureLevel.MEDIUM, None))
        self.assertTrue(handler.can_handle(MemoryPressureLevel.CRITICAL, None))


if __name__ == "__main__":
    unittest.main()
