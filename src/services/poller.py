"""Submit-and-poll loop for DNS resolve tests."""

import sys
import time
from typing import Callable, Optional

from src.config import Config
from src.models.dns_test import DNSResolveRequest, Snapshot
from src.models.poll_state import PollState, determine_next_state
from src.services.deduplicator import ResultDeduplicator
from src.services.logger import log_poll_completed, log_run_summary, log_test_submitted
from src.services.perfops_client import PerfOpsClient
from src.services.renderer import DNSResolveRenderer, Renderer
from src.utils.spinner import Spinner


def write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class Poller:
    """Runs one DNS resolve test end-to-end.

    Submits the test once, then waits the poll interval and fetches the
    cumulative snapshot until the platform reports it finished. In text mode
    every newly ready node result is written as soon as it is seen; in JSON
    mode nothing is written while polling and the caller gets the final
    snapshot.

    Any SubmissionError or PollError from the client propagates and leaves
    the poller in the ABORTED state. Nothing is retried.
    """

    def __init__(
        self,
        client: PerfOpsClient,
        config: Config,
        renderer: Optional[Renderer] = None,
        write: Callable[[str], None] = write_stdout,
        spinner: Optional[Spinner] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize poller.

        Args:
            client: PerfOps API client.
            config: Run configuration.
            renderer: Renderer for ready items (defaults to DNSResolveRenderer).
            write: Sink for rendered text.
            spinner: Progress indicator bracketing each network call.
            sleep: Delay function, injectable for tests.
        """
        self.client = client
        self.config = config
        self.renderer = renderer or DNSResolveRenderer()
        self.write = write
        self.spinner = spinner or Spinner()
        self.sleep = sleep
        self.deduplicator = ResultDeduplicator()
        self.state = PollState.IDLE
        self.test_id: str | None = None
        self.polls = 0

    def _set_state(self, new_state: PollState) -> None:
        self.state = determine_next_state(self.state, new_state)

    def submit(self, request: DNSResolveRequest) -> str:
        """Submit the test.

        Args:
            request: Test parameters.

        Returns:
            str: Test ID.

        Raises:
            SubmissionError: If the platform rejects the test.
        """
        self._set_state(PollState.SUBMITTING)
        if not self.config.output_json:
            self.write("\n")
        self.spinner.start()
        try:
            test_id = self.client.submit_dns_resolve(request)
        except Exception:
            self._set_state(PollState.ABORTED)
            raise
        finally:
            self.spinner.stop()

        self.test_id = test_id
        self._set_state(PollState.POLLING)
        log_test_submitted(test_id, request.target, request.query_type, request.dns_server)

        if self.config.debug and not self.config.output_json:
            self.write(f"Test ID: {test_id}\n")

        return test_id

    def fetch(self) -> Snapshot:
        """Wait the poll interval, then fetch the current snapshot.

        Returns:
            Snapshot: Cumulative results so far.

        Raises:
            PollError: If the fetch fails.
            ValueError: If the poller is not in the POLLING state.
        """
        if self.state is not PollState.POLLING:
            raise ValueError(f"Cannot fetch in state {self.state.value}")

        self.spinner.start()
        try:
            self.sleep(self.config.poll_interval_sec)
            snapshot = self.client.fetch_dns_resolve_output(self.test_id)
        except Exception:
            self._set_state(PollState.ABORTED)
            raise
        finally:
            self.spinner.stop()

        self.polls += 1
        return snapshot

    def render_new(self, snapshot: Snapshot) -> int:
        """Write every item that became ready in this snapshot.

        Args:
            snapshot: Latest snapshot.

        Returns:
            int: Number of items written.
        """
        ready_items = self.deduplicator.collect_ready(snapshot)
        for ready in ready_items:
            self.write(self.renderer.render(ready))
        return len(ready_items)

    def run(self, request: DNSResolveRequest) -> Snapshot:
        """Submit the test and poll until it finishes.

        Args:
            request: Test parameters.

        Returns:
            Snapshot: The final snapshot (finished=True).

        Raises:
            SubmissionError: If submission fails.
            PollError: If any fetch fails.
        """
        start_time = time.time()
        self.submit(request)

        while True:
            snapshot = self.fetch()

            new_items = 0
            if not self.config.output_json:
                new_items = self.render_new(snapshot)

            log_poll_completed(
                self.test_id, self.polls, len(snapshot.items), new_items, snapshot.finished
            )

            if snapshot.finished:
                break

        self._set_state(PollState.FINISHED)
        log_run_summary(
            test_id=self.test_id,
            polls=self.polls,
            rendered=self.deduplicator.rendered_count,
            total_items=len(snapshot.items),
            duration_sec=time.time() - start_time,
        )
        return snapshot
