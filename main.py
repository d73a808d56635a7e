"""
Monthly Punch Report Generator

Turns a report request message into rendered monthly punch reports
and a queued e-mail request.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from application.report_service import PunchReportService
from config.config_manager import ConfigManager
from domain.errors import PunchReportError
from infrastructure.logger import get_logger, set_console_level

logger = get_logger("Main")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a monthly punch report.")
    parser.add_argument(
        "message", nargs="?",
        help='Request JSON, e.g. \'{"employeeId": "42", "year": 2024, "month": 5}\''
    )
    parser.add_argument("--message-file", type=Path, help="Read the request JSON from a file")
    parser.add_argument("--config", type=Path, help="Path to config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Application entry point."""
    args = parse_args(argv)
    if args.verbose:
        set_console_level(logging.DEBUG)

    if args.message_file:
        body = args.message_file.read_text(encoding="utf-8")
    elif args.message:
        body = args.message
    else:
        logger.error("No request given, pass a JSON message or --message-file")
        return 1

    config = ConfigManager(args.config).load()

    try:
        service = PunchReportService.from_config(config)
        result = service.process_message(body)
    except PunchReportError as e:
        logger.error(f"Report generation failed: {e}")
        return 1

    for fmt, location in result.locations.items():
        print(f"{fmt}: {location}")
    if result.email_path:
        print(f"email: {result.email_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
