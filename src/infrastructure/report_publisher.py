"""
Report Publisher Module

Persists rendered report documents into a local output directory.
"""

from pathlib import Path

from domain.errors import ConfigurationError, DeliveryError
from infrastructure.logger import get_logger

logger = get_logger("ReportPublisher")


def format_filename(pattern: str, report_id: str, year: int, month: int, ext: str) -> str:
    """
    Format filename pattern with placeholders.

    Raises:
        ConfigurationError: If the pattern uses unknown placeholders or is malformed
    """
    try:
        return pattern.format(
            report_id=report_id,
            year=year,
            month=f"{month:02d}",
            ext=ext
        )
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigurationError(f"Invalid filename pattern '{pattern}': {e!r}") from e


class LocalReportPublisher:
    """
    Stores documents under an output directory.

    Locations are returned as "<output_dir>|<key>", the same store|key
    shape used for object storage references.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def publish(self, key: str, content: bytes) -> str:
        """
        Write a document and return its location.

        Raises:
            DeliveryError: If the key escapes the output directory or the
                file cannot be written
        """
        target = (self.output_dir / key).resolve()
        root = self.output_dir.resolve()
        if root != target and root not in target.parents:
            raise DeliveryError(f"Report key '{key}' resolves outside {self.output_dir}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise DeliveryError(f"Could not write report {target}: {e}") from e

        logger.info(f"Report published: {target} ({len(content)} bytes)")
        return f"{self.output_dir}|{key}"

    def resolve(self, location: str) -> Path:
        """Map a location string back to a file path."""
        _, _, key = location.rpartition("|")
        return self.output_dir / key
