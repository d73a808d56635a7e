"""
Request Parser Module

Parses report request messages into ReportRequest values.
Keys are matched case-insensitively; the legacy Portuguese field names
(FuncionarioId, Ano, Mes, RelatorioId) are accepted alongside English ones.
"""

import json
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from domain.entities import ReportPeriod
from domain.errors import MalformedRequestError


# Accepted aliases per field (lower-case)
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "employee_id": ("employeeid", "employee_id", "funcionarioid"),
    "year": ("year", "ano"),
    "month": ("month", "mes"),
    "report_id": ("reportid", "report_id", "relatorioid"),
}


@dataclass(frozen=True)
class ReportRequest:
    """A request to produce one employee's monthly report."""
    employee_id: str
    year: int
    month: int
    report_id: str

    @property
    def period(self) -> ReportPeriod:
        return ReportPeriod(self.year, self.month)


def _lookup(data: Mapping[str, Any], field_name: str) -> Optional[Any]:
    lowered = {str(key).lower(): value for key, value in data.items()}
    for alias in FIELD_ALIASES[field_name]:
        if alias in lowered and lowered[alias] not in (None, ""):
            return lowered[alias]
    return None


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise MalformedRequestError(f"Field '{field_name}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedRequestError(f"Field '{field_name}' must be an integer, got {value!r}")


def parse_request(body: Union[str, bytes, Mapping[str, Any]]) -> ReportRequest:
    """
    Parse a report request.

    Args:
        body: JSON text or an already decoded mapping

    Returns:
        ReportRequest

    Raises:
        MalformedRequestError: If the body is not JSON, a field is missing,
            or the period is invalid
    """
    if isinstance(body, (str, bytes)):
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedRequestError(f"Request body is not valid JSON: {e}") from e
    else:
        data = body

    if not isinstance(data, Mapping):
        raise MalformedRequestError("Request body must be a JSON object")

    employee_id = _lookup(data, "employee_id")
    year = _lookup(data, "year")
    month = _lookup(data, "month")

    missing = [
        name for name, value in
        (("employeeId", employee_id), ("year", year), ("month", month))
        if value is None
    ]
    if missing:
        raise MalformedRequestError(f"Request is missing field(s): {', '.join(missing)}")

    year = _as_int(year, "year")
    month = _as_int(month, "month")
    try:
        ReportPeriod(year, month)
    except ValueError as e:
        raise MalformedRequestError(str(e)) from e

    return ReportRequest(
        employee_id=str(employee_id),
        year=year,
        month=month,
        report_id=str(_lookup(data, "report_id") or uuid.uuid4()),
    )
