"""
E-mail Outbox Module

Queues e-mail send requests as JSON files for a separate sender process.
"""

import json
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from domain.errors import DeliveryError
from infrastructure.logger import get_logger

logger = get_logger("EmailOutbox")


@dataclass(frozen=True)
class EmailRequest:
    """A request to send one e-mail."""
    to: str
    subject: str
    html: str
    attachments: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Serialize with camelCase keys."""
        return {
            "to": self.to,
            "subject": self.subject,
            "html": self.html,
            "attachments": list(self.attachments),
        }


class JsonEmailOutbox:
    """Writes one JSON file per queued e-mail request."""

    def __init__(self, outbox_dir: Path):
        self.outbox_dir = Path(outbox_dir)

    def enqueue(self, request: EmailRequest) -> Path:
        """
        Queue an e-mail request.

        Returns:
            Path of the written JSON file

        Raises:
            DeliveryError: If the recipient is blank or the file cannot be written
        """
        if not request.to or not request.to.strip():
            raise DeliveryError("E-mail request has no recipient")

        path = self.outbox_dir / f"{uuid.uuid4().hex}.json"
        try:
            self.outbox_dir.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(request.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise DeliveryError(f"Could not queue e-mail to {request.to}: {e}") from e

        logger.info(f"E-mail queued for {request.to}: {request.subject}")
        return path
