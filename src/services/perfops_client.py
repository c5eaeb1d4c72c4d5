"""PerfOps API client for DNS resolve tests."""

import logging
from typing import Any, Optional

import httpx

from src.models.dns_test import DNSResolveRequest, Snapshot


logger = logging.getLogger(__name__)


class PerfOpsError(Exception):
    """Base class for PerfOps API failures."""


class SubmissionError(PerfOpsError):
    """The platform rejected or could not process a test submission."""


class PollError(PerfOpsError):
    """Fetching results for a submitted test failed."""


def _error_text(response: httpx.Response) -> str:
    """Extract a human-readable error from a failed API response.

    Args:
        response: Non-2xx response.

    Returns:
        str: The API's "error" field if present, else status and body text.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])

    text = response.text.strip()
    return f"HTTP {response.status_code}" + (f": {text}" if text else "")


class PerfOpsClient:
    """HTTP client for the PerfOps run API.

    Only the two calls a DNS resolve run needs: submit and fetch-snapshot.
    Use as a context manager so the underlying connection pool is closed.
    """

    def __init__(
        self,
        api_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize PerfOps client.

        Args:
            api_url: Base URL of the PerfOps API.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.api_url = api_url.rstrip("/")
        self.client = httpx.Client(
            base_url=self.api_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "PerfOpsClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the httpx client."""
        self.client.close()

    def submit_dns_resolve(self, request: DNSResolveRequest) -> str:
        """Submit a DNS resolve test.

        Args:
            request: Test parameters.

        Returns:
            str: Test ID used for all subsequent polls.

        Raises:
            SubmissionError: If the request fails or the response has no test ID.
        """
        try:
            response = self.client.post("/run/dns-resolve", json=request.to_payload())
        except httpx.HTTPError as e:
            logger.error(f"DNS resolve submission for {request.target} failed: {e}")
            raise SubmissionError(f"Could not submit test: {e}") from e

        if response.is_error:
            message = _error_text(response)
            logger.error(f"DNS resolve submission rejected: {message}")
            raise SubmissionError(message)

        try:
            data = response.json()
        except ValueError as e:
            raise SubmissionError(f"Invalid JSON in submission response: {e}") from e

        test_id = data.get("id") if isinstance(data, dict) else None
        if not test_id:
            raise SubmissionError("Submission response did not contain a test ID")

        logger.debug(f"Submitted DNS resolve test {test_id} for {request.target}")
        return str(test_id)

    def fetch_dns_resolve_output(self, test_id: str) -> Snapshot:
        """Fetch the cumulative results of a DNS resolve test.

        Args:
            test_id: ID returned by submit_dns_resolve.

        Returns:
            Snapshot: All node results collected so far.

        Raises:
            PollError: If the request fails or the response cannot be parsed.
        """
        try:
            response = self.client.get(f"/run/dns-resolve/{test_id}")
        except httpx.HTTPError as e:
            logger.error(f"Fetching results for test {test_id} failed: {e}")
            raise PollError(f"Could not fetch results for test {test_id}: {e}") from e

        if response.is_error:
            message = _error_text(response)
            logger.error(f"Fetching results for test {test_id} rejected: {message}")
            raise PollError(message)

        try:
            return Snapshot.from_json(response.json(), test_id=test_id)
        except ValueError as e:
            raise PollError(f"Invalid results for test {test_id}: {e}") from e
