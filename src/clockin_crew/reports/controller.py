from __future__ import annotations

import logging

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import date_arg, json_error, manager_required
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/reports/attendance.csv", endpoint="attendance_report_csv")
    @manager_required
    def attendance_report_csv():
        today = now_local().date()
        try:
            start = date_arg("start", today.replace(day=1))
            end = date_arg("end", today)
            export = container.report_service.export_csv(start=start, end=end)
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("[reports] export failed")
            return json_error("System error while exporting the report", 500)

        return app.response_class(
            export.content.encode("utf-8"),
            mimetype="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename={export.filename}",
                "X-Record-Count": str(export.record_count),
            },
        )
