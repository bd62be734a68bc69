# tests/conftest.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for Orcheck tests.

The configuration handles:
- Python path setup for module imports (project root and the shared
  history builders next to this file)
- Creating the process-wide logger once, against the session's stdout
- Common fixtures for histories and cluster nodes
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
tests_root = Path(__file__).parent
for path in (project_root, tests_root):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify the packages import and create the global logger.

    Yields:
        None: Control to test execution

    Raises:
        pytest.skip: If required modules cannot be imported
    """
    try:
        import logic
        import model
        import nemesis
        import parser
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    from utils.logger import get_logger

    get_logger()
    yield


@pytest.fixture
def sample_nodes():
    """Provide a standard four-node cluster.

    Returns:
        List[str]: Node identifiers in cluster order
    """
    return ["n0", "n1", "n2", "n3"]


@pytest.fixture
def healed_history():
    """A partition that heals, followed by agreeing reads.

    Returns:
        List[Operation]: adds {1, 2, 3}, a delete of 3, settled reads {1, 2}
    """
    from history_builders import add, delete, read, start, stop

    return [
        add(0, 1, "e1", 1),
        add(1, 2, "e2", 2),
        start(5),
        add(0, 3, "e3", 6),
        read(0, [1, 3], 7),
        read(1, [1, 2], 8),
        stop(10),
        delete(1, 3, "e3", 12),
        read(0, [1, 2], 20),
        read(1, [1, 2], 21),
        read(2, [2, 1], 22),
    ]
