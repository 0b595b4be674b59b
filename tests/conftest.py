"""
Linker Test Configuration
=========================

Shared fixtures for the linker tests.

It provides:
- Reset of the process-wide default configuration around every test
- Paths to the sample inputs under examples/inputs/
"""

from pathlib import Path

import pytest

from twopass.config import set_default_config

INPUTS_DIR = Path(__file__).parent.parent / "examples" / "inputs"


@pytest.fixture(autouse=True)
def reset_default_config(monkeypatch):
    """Make every test start from the built-in defaults."""
    monkeypatch.delenv("TWOPASS_MEMORY_SIZE", raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def input_1() -> Path:
    """The classic four-module input, which links without diagnostics."""
    return INPUTS_DIR / "input-1.txt"


@pytest.fixture
def input_2() -> Path:
    """An input that triggers every kind of error and an unused symbol."""
    return INPUTS_DIR / "input-2.txt"
