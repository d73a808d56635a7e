"""
Errors Module

Exception hierarchy shared by the domain core and its collaborators.
"""


class PunchReportError(Exception):
    """Base exception for punch report errors."""
    pass


class EmployeeNotFoundError(PunchReportError):
    """
    Raised when the requested employee has no matching record.

    The service raises this in strict mode instead of producing a report
    with blank identity fields.
    """
    def __init__(self, employee_id: str, message: str = None):
        self.employee_id = employee_id
        self.message = message or f"Employee '{employee_id}' was not found."
        super().__init__(self.message)


class MalformedRequestError(PunchReportError):
    """Raised when a report request cannot be parsed."""
    pass


class DataSourceError(PunchReportError):
    """Raised when the punch source is missing or unreadable."""
    pass


class ShiftClosedError(PunchReportError):
    """Raised when a finalized day is modified."""
    pass


class DeliveryError(PunchReportError):
    """Raised when a rendered report cannot be published or queued."""
    pass


class StatusUpdateError(PunchReportError):
    """Raised when a request's processing status cannot be recorded."""
    pass


class ConfigurationError(PunchReportError, ValueError):
    """Raised when report settings name an unknown format or a bad pattern."""
    pass
