"""
Report Service Module

Application layer service that orchestrates punch report generation:
request -> punch source -> shift builder -> report assembler ->
renderers -> publisher -> e-mail outbox -> request status.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from config.config_manager import AppConfig
from domain.entities import Employee, MonthlyReport, PunchEvent, ReportPeriod
from domain.errors import EmployeeNotFoundError, PunchReportError
from domain.hours_calculator import HoursCalculator
from domain.report_assembler import ReportAssembler
from domain.shift_builder import DailyShiftBuilder
from infrastructure.email_outbox import EmailRequest, JsonEmailOutbox
from infrastructure.html_renderer import HtmlReportRenderer
from infrastructure.logger import get_logger
from infrastructure.punch_loader import WorkbookPunchSource
from infrastructure.renderers import get_renderer, normalize_format
from infrastructure.report_publisher import LocalReportPublisher, format_filename
from infrastructure.request_parser import ReportRequest, parse_request
from infrastructure.request_status import JsonStatusLedger

logger = get_logger("ReportService")


@dataclass
class ReportGenerationParams:
    """
    Parameters for report generation.

    Decouples the service from the persisted AppConfig layout.
    """
    title: str = "Monthly Punch Record"
    date_format: str = "%d/%m/%Y"
    time_format: str = "%H:%M:%S"
    hours_label_pattern: str = "{hours} hours"
    output_formats: List[str] = field(default_factory=lambda: ["html"])
    filename_pattern: str = "{report_id}.{ext}"
    custom_font_path: Optional[str] = None

    strict_employee_lookup: bool = True
    sort_punches: bool = False

    send_email: bool = True
    subject_prefix: str = "Punch Record"


@dataclass
class ReportResult:
    """Result of one report request."""
    report_id: str
    report: MonthlyReport
    locations: Dict[str, str] = field(default_factory=dict)
    email_path: Optional[Path] = None


@dataclass
class BatchResult:
    """Result of a batch of report requests."""
    results: List[ReportResult] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


class PunchReportService:
    """
    Application service for generating monthly punch reports.

    The source must provide ``find_employee(employee_id)`` and
    ``load_punches(employee_id, period)``; punches are expected sorted
    ascending by timestamp unless ``sort_punches`` is enabled.
    """

    def __init__(
        self,
        source,
        publisher: LocalReportPublisher,
        outbox: Optional[JsonEmailOutbox] = None,
        params: Optional[ReportGenerationParams] = None,
        status_store: Optional[JsonStatusLedger] = None
    ):
        self.source = source
        self.publisher = publisher
        self.outbox = outbox
        self.params = params or ReportGenerationParams()
        self.status_store = status_store
        self._validate_params()

        self.calculator = HoursCalculator()
        self.builder = DailyShiftBuilder(self.calculator, sort_input=self.params.sort_punches)
        self.assembler = ReportAssembler(
            date_format=self.params.date_format,
            time_format=self.params.time_format,
            hours_label_pattern=self.params.hours_label_pattern,
        )

    def _validate_params(self) -> None:
        """
        Reject unusable output settings before any request is processed.

        Raises:
            ConfigurationError: Unknown output format or malformed filename pattern
        """
        for fmt in self.params.output_formats:
            normalize_format(fmt)
        format_filename(self.params.filename_pattern, "report", 2000, 1, "html")

    def build_report(
        self,
        employee: Employee,
        period: ReportPeriod,
        punches: Sequence[PunchEvent]
    ) -> MonthlyReport:
        """Run the pure core pipeline: shifts, hours, report."""
        shifts = self.builder.build(punches)
        if self.builder.discarded:
            for punch in self.builder.discarded:
                logger.debug(
                    f"Discarded punch {punch.punch_id} at {punch.timestamp}: "
                    f"{punch.date.isoformat()} already has four punches"
                )
            logger.info(
                f"Discarded {len(self.builder.discarded)} punches beyond the fourth of their day"
            )
        total = self.calculator.monthly_total(shifts)
        return self.assembler.assemble(
            employee.name, employee.email, period, shifts, total
        )

    def resolve_employee(self, employee_id: str) -> Employee:
        """
        Look up the employee for a request.

        Raises:
            EmployeeNotFoundError: If no record matches and the lookup is strict
        """
        employee = self.source.find_employee(employee_id)
        if employee is not None:
            return employee

        if self.params.strict_employee_lookup:
            raise EmployeeNotFoundError(employee_id)

        logger.warning(
            f"Employee {employee_id} not found, continuing with blank name and e-mail"
        )
        return Employee(employee_id=employee_id, name="", email="")

    def generate_report(self, request: ReportRequest) -> ReportResult:
        """
        Generate, publish and queue delivery of one report.

        Raises:
            EmployeeNotFoundError: Unknown employee in strict mode
            DataSourceError: Punch source unreadable
            DeliveryError: Publishing or queuing failed
            StatusUpdateError: The request status could not be recorded
        """
        period = request.period
        logger.info(
            f"Generating report {request.report_id} for employee "
            f"{request.employee_id}, period {period.label}"
        )

        employee = self.resolve_employee(request.employee_id)
        punches = self.source.load_punches(request.employee_id, period)
        report = self.build_report(employee, period, punches)

        logger.info(
            f"Report {request.report_id}: {len(report.rows)} days, "
            f"{report.total_hours} hours"
        )

        result = ReportResult(report_id=request.report_id, report=report)
        for fmt in self.params.output_formats:
            renderer = get_renderer(
                fmt, title=self.params.title, custom_font_path=self.params.custom_font_path
            )
            key = format_filename(
                self.params.filename_pattern,
                request.report_id, period.year, period.month, renderer.extension
            )
            result.locations[fmt] = self.publisher.publish(key, renderer.render_bytes(report))

        if self.params.send_email and self.outbox is not None:
            result.email_path = self._queue_email(report, result)

        if self.status_store is not None:
            self.status_store.mark_processed(request.report_id, result.locations)

        return result

    def _queue_email(self, report: MonthlyReport, result: ReportResult) -> Optional[Path]:
        if not report.employee_email:
            logger.warning(f"Report {result.report_id}: no e-mail address, skipping delivery")
            return None

        html = HtmlReportRenderer(title=self.params.title).render(report)
        request = EmailRequest(
            to=report.employee_email,
            subject=f"{self.params.subject_prefix} {report.period_label}",
            html=html,
            attachments=tuple(result.locations.values()),
        )
        return self.outbox.enqueue(request)

    def process_message(self, body) -> ReportResult:
        """Parse a request message and generate its report."""
        return self.generate_report(parse_request(body))

    def process_messages(self, bodies: Iterable) -> BatchResult:
        """
        Process a batch of request messages.

        A failing message is logged and its report id (or "message-<index>"
        when the body cannot be parsed) is recorded in ``failed``; the rest
        of the batch continues. Parsed requests that fail are marked FAILED
        in the status store.
        """
        batch = BatchResult()
        for index, body in enumerate(bodies):
            label = f"message-{index}"
            request = None
            try:
                request = parse_request(body)
                label = request.report_id
                batch.results.append(self.generate_report(request))
            except Exception as e:
                logger.error(f"Report request {label} failed: {e}")
                batch.failed.append(label)
                if request is not None:
                    self._record_failure(request.report_id, e)

        logger.info(
            f"Batch finished: {len(batch.results)} succeeded, {len(batch.failed)} failed"
        )
        return batch

    def _record_failure(self, report_id: str, error: Exception) -> None:
        if self.status_store is None:
            return
        try:
            self.status_store.mark_failed(report_id, str(error))
        except PunchReportError as e:
            logger.error(f"Could not record failure of request {report_id}: {e}")

    @classmethod
    def from_config(cls, config: AppConfig) -> "PunchReportService":
        """
        Build a service wired to the local workbook, output and outbox
        directories and the status ledger named in the configuration.

        Raises:
            ConfigurationError: Unknown output format or malformed filename pattern
        """
        return cls(
            source=WorkbookPunchSource(Path(config.paths.punch_workbook)),
            publisher=LocalReportPublisher(Path(config.paths.output_dir)),
            outbox=JsonEmailOutbox(Path(config.paths.outbox_dir)),
            params=build_params_from_config(config),
            status_store=JsonStatusLedger(Path(config.paths.status_file)),
        )


def build_params_from_config(config: AppConfig) -> ReportGenerationParams:
    """Build ReportGenerationParams from AppConfig."""
    return ReportGenerationParams(
        title=config.report.title,
        date_format=config.report.date_format,
        time_format=config.report.time_format,
        hours_label_pattern=config.report.hours_label_pattern,
        output_formats=list(config.report.output_formats),
        filename_pattern=config.report.filename_pattern,
        custom_font_path=config.paths.custom_font_path or None,
        strict_employee_lookup=config.policy.strict_employee_lookup,
        sort_punches=config.policy.sort_punches,
        send_email=config.email.enabled,
        subject_prefix=config.email.subject_prefix,
    )
