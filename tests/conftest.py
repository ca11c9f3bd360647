"""Pytest configuration and shared fixtures for kvconf tests.

Provides helpers that write config and settings files into a per-test
temporary directory.
"""

import logging
from pathlib import Path
from typing import Callable

import pytest

from kvconf.utils.logging_setup import shutdown_logging


# ============================================================================
# File Fixtures
# ============================================================================

@pytest.fixture
def write_conf(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes text to a config file and returns its path."""

    def _write(text: str, name: str = "test.conf", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path

    return _write


@pytest.fixture
def sample_conf(write_conf: Callable[..., Path]) -> Path:
    """Config file with one value of each kind the parser produces."""
    return write_conf(
        "string_key=string_value\n"
        "int_key=42\n"
        "float_key=3.141590\n"
        "double_key=2.718280\n"
        "long_key=3000000000\n"
        "string_key_whitespaces1=  string_value  \n"
        "string_key_whitespaces2 =string_value  \n"
    )


# ============================================================================
# Logging Isolation
# ============================================================================

@pytest.fixture(autouse=True)
def reset_kvconf_logging():
    """Undo any global logging setup a test performed."""
    yield
    shutdown_logging()
    logging.getLogger("kvconf").setLevel(logging.NOTSET)
