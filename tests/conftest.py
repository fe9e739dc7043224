"""Shared fixtures for vce tests."""

from pathlib import Path

import pytest

from tests.test_utils.context_builders import tool_paths_for_test
from vce.core.paths import ToolPaths


@pytest.fixture
def tool_paths(tmp_path: Path) -> ToolPaths:
    """ToolPaths with a vcpkg root and working directory under tmp_path."""
    return tool_paths_for_test(tmp_path)
