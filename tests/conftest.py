"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from loguru import logger

# Keep tracing in-process and quiet during tests
os.environ.setdefault("OTEL_SDK_DISABLED", "true")

from src.revision_checker.git_client import GitClient  # noqa: E402

FIXED_NOW = datetime(2025, 9, 24, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_logging():
    """Point loguru at the current stderr; CLI tests swap it for CliRunner's."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
    yield


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed UTC instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def working_copy(tmp_path):
    """Working copy directory containing a tracked revision file."""
    revision_file = tmp_path / "hcp" / "Revision.mk"
    revision_file.parent.mkdir(parents=True)
    revision_file.write_text('ARO_HCP_REPO_REVISION="526f70d3d81f"\n')
    return tmp_path


@pytest.fixture
def mock_git_client(working_copy):
    """Mock git client bound to the working copy fixture."""
    client = Mock(spec=GitClient)
    client.working_dir = working_copy
    client.last_commit_date.return_value = "2025-09-24 02:55:10 -0700"
    client.last_commit_id.return_value = "a" * 40
    client.commits_since.return_value = []
    return client
