"""
Shared fixtures for podsync tests.
"""

import pytest

from tests.test_utils import RecordingRunner


@pytest.fixture
def workspace(tmp_path):
    """An empty build workspace."""
    return tmp_path


@pytest.fixture
def recording_runner():
    """A runner where every command succeeds."""
    return RecordingRunner()
