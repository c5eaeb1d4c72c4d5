"""Unit tests for the command-line entry point."""

import json
from unittest.mock import MagicMock, patch

import pytest

from src.main import build_parser, build_request, main
from src.services.perfops_client import PollError, SubmissionError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("PERFOPS_API_URL", "HTTP_TIMEOUT", "POLL_INTERVAL_MS", "OUTPUT_JSON", "DEBUG"):
        monkeypatch.delenv(key, raising=False)
    # Keep setup_logging from replacing pytest's handlers
    monkeypatch.setattr("src.main.setup_logging", lambda debug=False: None)


def parse(*argv):
    return build_parser().parse_args(list(argv))


def test_build_request_from_arguments():
    """Test flags map onto the request fields."""
    args = parse("-T", "mx", "-S", "1.1.1.1", "-F", "Germany", "-N", "1,2", "-L", "3", "bing.com")

    request = build_request(args)

    assert request.target == "bing.com"
    assert request.query_type == "MX"
    assert request.dns_server == "1.1.1.1"
    assert request.location == "Germany"
    assert request.nodes == (1, 2)
    assert request.limit == 3


def test_build_request_rejects_zero_limit():
    """Test limit must be positive."""
    with pytest.raises(ValueError, match="Limit must be at least 1"):
        build_request(parse("-T", "A", "-S", "8.8.8.8", "-L", "0", "bing.com"))


def test_type_and_dns_server_required():
    """Test missing required flags exit with a usage error."""
    with pytest.raises(SystemExit):
        parse("bing.com")


@patch("src.main.PerfOpsClient")
@patch("src.main.Poller")
def test_main_success_text_mode(mock_poller_class, mock_client_class, make_snapshot, capsys):
    mock_client_class.return_value.__enter__.return_value = MagicMock()
    mock_poller_class.return_value.run.return_value = make_snapshot([], finished=True)

    exit_code = main(["-T", "A", "-S", "8.8.8.8", "bing.com"])

    assert exit_code == 0
    assert capsys.readouterr().out == ""
    config = mock_poller_class.call_args[0][1]
    assert config.output_json is False


@patch("src.main.PerfOpsClient")
@patch("src.main.Poller")
def test_main_json_mode_prints_snapshot(
    mock_poller_class, mock_client_class, make_item, make_snapshot, capsys
):
    mock_client_class.return_value.__enter__.return_value = MagicMock()
    mock_poller_class.return_value.run.return_value = make_snapshot(
        [make_item("1")], finished=True
    )

    exit_code = main(["--json", "-T", "A", "-S", "8.8.8.8", "bing.com"])

    assert exit_code == 0
    document = json.loads(capsys.readouterr().out)
    assert document["id"] == "test-1"
    assert document["items"][0]["id"] == "1"


@patch("src.main.PerfOpsClient")
@patch("src.main.Poller")
def test_main_submission_error_returns_1(mock_poller_class, mock_client_class):
    mock_client_class.return_value.__enter__.return_value = MagicMock()
    mock_poller_class.return_value.run.side_effect = SubmissionError("rejected")

    assert main(["-T", "A", "-S", "8.8.8.8", "bing.com"]) == 1


@patch("src.main.PerfOpsClient")
@patch("src.main.Poller")
def test_main_poll_error_returns_1(mock_poller_class, mock_client_class):
    mock_client_class.return_value.__enter__.return_value = MagicMock()
    mock_poller_class.return_value.run.side_effect = PollError("lost connection")

    assert main(["-T", "A", "-S", "8.8.8.8", "bing.com"]) == 1


@patch("src.main.PerfOpsClient")
def test_main_invalid_query_type_returns_1(mock_client_class):
    assert main(["-T", "AXFR", "-S", "8.8.8.8", "bing.com"]) == 1
    mock_client_class.assert_not_called()


def test_main_invalid_config_returns_1(monkeypatch):
    monkeypatch.setenv("POLL_INTERVAL_MS", "5")

    assert main(["-T", "A", "-S", "8.8.8.8", "bing.com"]) == 1
