from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.web import current_user_id, json_error, login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container
from ..team.service import dashboard_to_ui
from .service import navigation_for

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = request.form
        employee_id = payload.get("employee_id", "")
        remember = payload.get("remember_me")

        try:
            s_profile = container.profile_service.sign_in(employee_id)
        except ValidationError as e:
            return json_error(str(e), 400)
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except Exception:
            logger.exception("[profiles] sign-in failed")
            return json_error("System error while signing in", 500)

        session.permanent = bool(remember)
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_profile.profile_id
        session["name"] = s_profile.name
        session["employee_id"] = s_profile.employee_id
        session["role"] = s_profile.role.value

        return jsonify({"success": True, "name": s_profile.name, "role": s_profile.role.value})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", endpoint="me")
    @login_required
    def me():
        role = Role(session["role"])
        return jsonify(
            {
                "id": current_user_id(),
                "name": session.get("name"),
                "employee_id": session.get("employee_id"),
                "role": role.value,
                "navigation": [{"name": n.name, "href": n.href} for n in navigation_for(role)],
            }
        )

    @app.route("/", endpoint="index")
    @login_required
    def index():
        today = now_local().date()
        try:
            if session.get("role") == Role.MANAGER.value:
                data = dashboard_to_ui(container.team_service.build_dashboard(today))
                return jsonify({"view": "manager", **data})

            data = container.attendance_service.build_dashboard(current_user_id(), today)
            return jsonify({"view": "employee", **data})
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("[profiles] dashboard failed")
            return json_error("System error while loading the dashboard", 500)
