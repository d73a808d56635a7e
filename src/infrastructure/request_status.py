"""
Request Status Module

Records the processing outcome of each report request in a JSON ledger
keyed by report id: the status and where the published report lives.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from domain.errors import StatusUpdateError
from infrastructure.logger import get_logger

logger = get_logger("RequestStatus")


STATUS_PROCESSED = "PROCESSED"
STATUS_FAILED = "FAILED"


class JsonStatusLedger:
    """
    Request status store backed by a single JSON file.

    Each entry looks like::

        {"status": "PROCESSED", "location": "<dir>|<key>", "locations": {...}}

    ``location`` is the primary document (HTML when published), the others
    are listed per format under ``locations``. Failed requests carry an
    ``error`` message instead.
    """

    def __init__(self, status_file: Path):
        self.status_file = Path(status_file)

    def mark_processed(self, report_id: str, locations: Dict[str, str]) -> None:
        """Record a successfully published report."""
        primary = locations.get("html") or next(iter(locations.values()), "")
        self._write_entry(report_id, {
            "status": STATUS_PROCESSED,
            "location": primary,
            "locations": dict(locations),
        })
        logger.info(f"Request {report_id} marked {STATUS_PROCESSED}: {primary}")

    def mark_failed(self, report_id: str, error: str) -> None:
        """Record a request that could not be completed."""
        self._write_entry(report_id, {
            "status": STATUS_FAILED,
            "error": error,
        })
        logger.info(f"Request {report_id} marked {STATUS_FAILED}")

    def get(self, report_id: str) -> Optional[dict]:
        """Get the recorded entry for a request, or None."""
        return self._load().get(report_id)

    def _load(self) -> Dict[str, dict]:
        if not self.status_file.exists():
            return {}
        try:
            with open(self.status_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StatusUpdateError(
                f"Could not read status ledger {self.status_file}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise StatusUpdateError(f"Status ledger {self.status_file} is not a JSON object")
        return data

    def _write_entry(self, report_id: str, entry: dict) -> None:
        data = self._load()
        data[report_id] = entry
        try:
            self.status_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.status_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StatusUpdateError(
                f"Could not update status of request {report_id}: {e}"
            ) from e
