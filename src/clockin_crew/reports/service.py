from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..attendance.aggregator import report_filename, serialize_to_csv
from ..attendance.repository import AttendanceRepository
from ..common.validators import require_date_range
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportExport:
    filename: str
    content: str
    record_count: int


class ReportService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def export_csv(self, *, start: date, end: date) -> ReportExport:
        start, end = require_date_range(start, end)
        rows = list(self._attendance.get_report_rows(start_date=start, end_date=end))
        if not rows:
            raise ValidationError("No attendance records found for the selected date range.")

        logger.info("[reports] exported %d attendance records (%s..%s)", len(rows), start, end)
        return ReportExport(
            filename=report_filename(start, end),
            content=serialize_to_csv(rows),
            record_count=len(rows),
        )
