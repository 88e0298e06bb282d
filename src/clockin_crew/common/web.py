from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.exceptions import AuthorizationError
from ..profiles.service import require_manager
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        try:
            require_manager(session.get("role"))
        except AuthorizationError as e:
            logger.info("[auth] %s denied manager view %s", session.get("user_id"), request.path)
            return json_error(str(e), 403)
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> str:
    return str(session["user_id"])


def date_arg(name: str, default: date) -> date:
    value: Optional[str] = request.args.get(name)
    return parse_iso_date(value) if value else default
