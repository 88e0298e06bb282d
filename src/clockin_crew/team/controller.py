from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_date, now_local
from ..common.web import date_arg, json_error, manager_required
from ..core.exceptions import ValidationError
from ..container import Container
from .service import STATUS_FILTER_ALL, dashboard_to_ui, report_row_to_ui


def register(app: Flask, container: Container) -> None:
    @app.route("/manager/dashboard", endpoint="manager_dashboard")
    @manager_required
    def manager_dashboard():
        dashboard = container.team_service.build_dashboard(now_local().date())
        return jsonify(dashboard_to_ui(dashboard))

    @app.route("/team/attendance", endpoint="team_attendance")
    @manager_required
    def team_attendance():
        try:
            day = date_arg("date", now_local().date())
            rows = container.team_service.team_attendance(
                day,
                search=request.args.get("search", ""),
                status=request.args.get("status", STATUS_FILTER_ALL),
            )
        except ValidationError as e:
            return json_error(str(e), 400)

        return jsonify(
            {
                "date": format_date(day),
                "count": len(rows),
                "records": [report_row_to_ui(r) for r in rows],
            }
        )
