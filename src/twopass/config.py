"""
Linker Configuration
====================

Configuration for the target machine. Values can come from:
- Default values (defined here)
- Environment variables
- Command-line options (tplink -m/--memory-size)

The target machine is word addressable. Each word holds a 4-digit
instruction: one opcode digit followed by a 3-digit address, so the
memory can never be larger than 1000 words.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os

from twopass.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_MEMORY_SIZE = 600
# One opcode digit followed by a 3-digit address
WORD_BASE = 1000


@dataclass
class LinkerConfig:
    """
    Configuration for a linking run.

    Attributes:
        machine_memory_size: Number of words in the target memory (default: 600).
            Resolved addresses at or above this value are forced to zero.
    """

    machine_memory_size: int = DEFAULT_MEMORY_SIZE

    @property
    def word_base(self) -> int:
        """Multiplier applied to the opcode digit when building a word."""
        return WORD_BASE

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "LinkerConfig":
        """
        Create LinkerConfig from environment variables.

        Environment variables (all optional):
            TWOPASS_MEMORY_SIZE: Machine memory size in words (integer)

        Returns:
            LinkerConfig with values from environment variables
        """
        config = cls()

        if size := os.environ.get("TWOPASS_MEMORY_SIZE"):
            try:
                config.machine_memory_size = int(size)
            except ValueError:
                logger.warning(f"Ignoring invalid TWOPASS_MEMORY_SIZE={size!r}")

        return config

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def validate(self) -> "LinkerConfig":
        """
        Check that the configuration describes a usable machine.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigError: If the memory size is not positive or does not fit
                in the 3-digit address field
        """
        if self.machine_memory_size < 1:
            raise ConfigError(
                f"machine memory size must be positive, got {self.machine_memory_size}"
            )
        if self.machine_memory_size > self.word_base:
            raise ConfigError(
                f"machine memory size {self.machine_memory_size} does not fit in a "
                f"3-digit address (maximum {self.word_base})"
            )
        return self

    def with_memory_size(self, size: Optional[int]) -> "LinkerConfig":
        """Return a copy with the memory size overridden (None keeps it)."""
        if size is None:
            return self
        return LinkerConfig(machine_memory_size=size)


# ═══════════════════════════════════════════════════════════════════════════════
# DEFAULT CONFIGURATION INSTANCE
# ═══════════════════════════════════════════════════════════════════════════════

_default_config: Optional[LinkerConfig] = None


def get_default_config() -> LinkerConfig:
    """
    Get the default linker configuration.

    Creates from environment variables on first access.
    Can be overridden by calling set_default_config().
    """
    global _default_config
    if _default_config is None:
        _default_config = LinkerConfig.from_env()
    return _default_config


def set_default_config(config: Optional[LinkerConfig]) -> None:
    """
    Set the default linker configuration.

    Passing None resets it, so the next get_default_config() call
    reads the environment again.
    """
    global _default_config
    _default_config = config
