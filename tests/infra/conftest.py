"""
Shared fixtures for infra tests.

All tests use real filesystem operations with temporary directories.
"""

import pytest


@pytest.fixture
def log_dir(tmp_path):
    """Log directory path; not created, so lazy creation can be checked."""
    return tmp_path / "logs"
