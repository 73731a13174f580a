"""
Configuration management for parsing and segmentation.
"""

from typing import Optional
from dataclasses import dataclass, field
import psutil


@dataclass
class ParseConfig:
    """Global configuration for parsing operations."""

    # Chunking
    default_chunk_size: int = 1000

    # Memory limits
    memory_limit: int = field(default_factory=lambda: int(psutil.virtual_memory().total * 0.8))
    memory_checks: bool = True
    memory_check_interval: int = 10_000  # elements drawn between checks

    # Logging
    log_drains: bool = True

    _instance: Optional['ParseConfig'] = None

    @classmethod
    def get_instance(cls) -> 'ParseConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

    def resolve_chunk_size(self, size: Optional[int] = None) -> int:
        """Return ``size`` or the configured default chunk size."""
        if size is None:
            return self.default_chunk_size
        return size

    def format_bytes(self, bytes: int) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if bytes < 1024.0:
                return f"{bytes:.2f} {unit}"
            bytes /= 1024.0
        return f"{bytes:.2f} PB"


# Global configuration instance
config = ParseConfig.get_instance()
