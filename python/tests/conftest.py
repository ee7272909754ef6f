"""Pytest configuration for kernel_selector tests.

Key Principles:
- No notebook server: HTTP goes through httpx.MockTransport
- No real session: FakeSession stands in for the document session
- Each test gets a fresh bus, presentation and catalog
"""

import sys
from pathlib import Path

import pytest

# Add paths for imports
# 1. python/ (for the kernel_selector package when not installed)
python_root = Path(__file__).parent.parent
if str(python_root) not in sys.path:
    sys.path.insert(0, str(python_root))

# 2. tests directory (for fixtures.*)
tests_root = Path(__file__).parent
if str(tests_root) not in sys.path:
    sys.path.insert(0, str(tests_root))

from fixtures.catalog import BASE_URL, CatalogServer  # noqa: E402
from fixtures.mocks.session_mocks import FakeSession  # noqa: E402

from kernel_selector.events import EventBus  # noqa: E402
from kernel_selector.settings import Settings  # noqa: E402
from kernel_selector.ui import Presentation  # noqa: E402


@pytest.fixture
def bus(mock_logger):
    return EventBus(logger=mock_logger)


@pytest.fixture
def presentation():
    return Presentation()


@pytest.fixture
def catalog_server():
    return CatalogServer()


@pytest.fixture
def session(bus):
    return FakeSession(bus, resolve={"python": "python3"})


@pytest.fixture
def settings():
    return Settings(base_url=BASE_URL, request_timeout=5.0, extension_timeout=5.0)


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (may use mocks)"
    )
    config.addinivalue_line(
        "markers", "integration: Tests wiring several components together"
    )
