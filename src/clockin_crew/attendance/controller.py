from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_date, now_local
from ..common.web import current_user_id, date_arg, json_error, login_required
from ..core.exceptions import ValidationError
from ..container import Container
from .service import ActionResult, record_to_ui

logger = logging.getLogger(__name__)

_ACTION_MESSAGES = {
    "check_in": "Checked in! You've been marked {status} for today.",
    "check_out": "Checked out! Have a great day!",
}


def _action_payload(result: ActionResult) -> dict:
    return {
        "success": True,
        "action": result.action.value,
        "status": result.status.value,
        "at": result.at.isoformat(timespec="seconds"),
        "total_hours": result.total_hours,
        "message": _ACTION_MESSAGES[result.action.value].format(status=result.status.value),
    }


def register(app: Flask, container: Container) -> None:
    def _run_action(action, failure_message: str):
        try:
            return jsonify(_action_payload(action(current_user_id())))
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("[attendance] %s", failure_message)
            return json_error(failure_message, 500)

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            data = container.attendance_service.build_dashboard(current_user_id(), now_local().date())
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify(data)

    @app.route("/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        return _run_action(container.attendance_service.check_in, "System error while checking in")

    @app.route("/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        return _run_action(container.attendance_service.check_out, "System error while checking out")

    @app.route("/api/checkin/toggle", methods=["POST"], endpoint="api_checkin_toggle")
    @login_required
    def api_checkin_toggle():
        """Check in or out depending on today's record."""
        return _run_action(container.attendance_service.toggle, "System error while recording attendance")

    @app.route("/attendance/history", endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            selected = date_arg("date", now_local().date())
            history = container.attendance_service.get_month_history(current_user_id(), selected)
        except ValidationError as e:
            return json_error(str(e), 400)

        return jsonify(
            {
                "selected_date": format_date(selected),
                "selected_record": record_to_ui(history.selected) if history.selected else None,
                "records": [record_to_ui(r) for r in history.records],
                "highlights": history.highlights,
            }
        )
