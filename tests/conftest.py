"""pytest fixtures for testing."""

import pytest
from unittest.mock import Mock


def _make_item(item_id, message="", output=("93.184.216.34",), node_id=12):
    """Build a snapshot item for a node in Frankfurt."""
    from src.models.dns_test import NodeInfo, Result, ResultItem

    return ResultItem(
        id=item_id,
        result=Result(
            node=NodeInfo(id=node_id, as_number=13335, city="Frankfurt", country_name="Germany"),
            message=message,
            output=tuple(output),
        ),
    )


def _make_snapshot(items, finished=False, test_id="test-1"):
    from src.models.dns_test import Snapshot

    return Snapshot(test_id=test_id, items=tuple(items), finished=finished)


@pytest.fixture
def config():
    """Default text-mode configuration."""
    from src.config import Config

    return Config(
        api_url="https://api.perfops.net",
        http_timeout=30,
        poll_interval_ms=500,
        output_json=False,
        debug=False,
    )


@pytest.fixture
def sample_request():
    """Sample DNS resolve request."""
    from src.models.dns_test import DNSResolveRequest

    return DNSResolveRequest(
        target="example.com",
        query_type="A",
        dns_server="8.8.8.8",
    )


@pytest.fixture
def mock_client():
    """Mock PerfOps client for unit tests."""
    mock = Mock()
    mock.submit_dns_resolve.return_value = "test-1"
    return mock


@pytest.fixture
def mock_spinner():
    return Mock()


@pytest.fixture
def make_item():
    """Factory for snapshot items."""
    return _make_item


@pytest.fixture
def make_snapshot():
    """Factory for snapshots."""
    return _make_snapshot
