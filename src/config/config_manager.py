"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Provides bi-directional mapping between the config dataclasses and JSON persistence.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")


@dataclass
class Paths:
    """File paths configuration."""
    punch_workbook: str = "punches.xlsx"
    output_dir: str = "reports"
    outbox_dir: str = "outbox"
    status_file: str = "request_status.json"
    custom_font_path: str = ""  # TTF font for non Latin-1 names in PDF output


@dataclass
class ReportSettings:
    """Formatting and output settings for generated reports."""
    title: str = "Monthly Punch Record"
    date_format: str = "%d/%m/%Y"
    time_format: str = "%H:%M:%S"
    hours_label_pattern: str = "{hours} hours"

    # Supported formats: "html", "pdf", "xlsx"
    output_formats: List[str] = field(default_factory=lambda: ["html"])

    # Placeholders: {report_id}, {year}, {month}, {ext}
    filename_pattern: str = "{report_id}.{ext}"


@dataclass
class Policy:
    """Behaviour switches for edge cases."""
    # False replicates the legacy behaviour: unknown employees get a blank report
    strict_employee_lookup: bool = True
    # Re-sort punches before grouping instead of trusting the loader order
    sort_punches: bool = False


@dataclass
class EmailSettings:
    """E-mail request settings."""
    enabled: bool = True
    subject_prefix: str = "Punch Record"


@dataclass
class AppConfig:
    """Main application configuration container."""
    paths: Paths = field(default_factory=Paths)
    report: ReportSettings = field(default_factory=ReportSettings)
    policy: Policy = field(default_factory=Policy)
    email: EmailSettings = field(default_factory=EmailSettings)


class ConfigManager:
    """
    Manages application configuration with JSON persistence.

    Responsibilities:
    - Load configuration from JSON file
    - Save configuration to JSON file
    - Provide default configuration
    - Convert between dataclass and dict representations
    """

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.json"

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else self.DEFAULT_CONFIG_PATH
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, KeyError, TypeError) as e:
                logger.warning(f"Failed to load config {self.config_path}, using defaults: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = self._config_to_dict(self._config)
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def update(self, **kwargs) -> None:
        """Update specific configuration sections."""
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
        self.save()

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "paths": {
                "punch_workbook": config.paths.punch_workbook,
                "output_dir": config.paths.output_dir,
                "outbox_dir": config.paths.outbox_dir,
                "status_file": config.paths.status_file,
                "custom_font_path": config.paths.custom_font_path
            },
            "report": {
                "title": config.report.title,
                "date_format": config.report.date_format,
                "time_format": config.report.time_format,
                "hours_label_pattern": config.report.hours_label_pattern,
                "output_formats": list(config.report.output_formats),
                "filename_pattern": config.report.filename_pattern
            },
            "policy": {
                "strict_employee_lookup": config.policy.strict_employee_lookup,
                "sort_punches": config.policy.sort_punches
            },
            "email": {
                "enabled": config.email.enabled,
                "subject_prefix": config.email.subject_prefix
            }
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        paths_data = data.get("paths", {})
        report_data = data.get("report", {})
        policy_data = data.get("policy", {})
        email_data = data.get("email", {})

        defaults = AppConfig()

        paths = Paths(
            punch_workbook=paths_data.get("punch_workbook", defaults.paths.punch_workbook),
            output_dir=paths_data.get("output_dir", defaults.paths.output_dir),
            outbox_dir=paths_data.get("outbox_dir", defaults.paths.outbox_dir),
            status_file=paths_data.get("status_file", defaults.paths.status_file),
            custom_font_path=paths_data.get("custom_font_path", "")
        )

        report = ReportSettings(
            title=report_data.get("title", defaults.report.title),
            date_format=report_data.get("date_format", defaults.report.date_format),
            time_format=report_data.get("time_format", defaults.report.time_format),
            hours_label_pattern=report_data.get(
                "hours_label_pattern", defaults.report.hours_label_pattern
            ),
            output_formats=list(report_data.get("output_formats", defaults.report.output_formats)),
            filename_pattern=report_data.get("filename_pattern", defaults.report.filename_pattern)
        )

        policy = Policy(
            strict_employee_lookup=policy_data.get("strict_employee_lookup", True),
            sort_punches=policy_data.get("sort_punches", False)
        )

        email = EmailSettings(
            enabled=email_data.get("enabled", True),
            subject_prefix=email_data.get("subject_prefix", defaults.email.subject_prefix)
        )

        return AppConfig(
            paths=paths,
            report=report,
            policy=policy,
            email=email
        )
