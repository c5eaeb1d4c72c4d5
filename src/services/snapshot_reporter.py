"""Structured output for a finished test."""

import json

from src.models.dns_test import Snapshot


class SnapshotReporter:
    """Generates the JSON document printed in structured output mode."""

    @staticmethod
    def generate_json_report(snapshot: Snapshot) -> str:
        """Generate JSON-formatted test results.

        Args:
            snapshot: Final snapshot of the test.

        Returns:
            str: Pretty-printed JSON string with sorted keys for determinism.

        Example:
            >>> print(SnapshotReporter.generate_json_report(snapshot))
            {
              "finished": true,
              "id": "ab12cd",
              "items": [...]
            }
        """
        return json.dumps(snapshot.to_json(), indent=2, sort_keys=True)
