from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container
from ..core.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)

_PHONE_KEYS = ("phone", "from", "From")
_ACTION_KEYS = ("action", "message", "body", "Body")


def _first_param(payload: dict, keys: tuple[str, ...]) -> str:
    for key in keys:
        value = payload.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def _request_params() -> dict:
    """Merge query string, form fields and JSON body (later sources win)."""
    params: dict = dict(request.args.items())
    params.update(request.form.items())
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        params.update(body)
    return params


def register(app: Flask, container: Container) -> None:
    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"}), 200

    @app.route("/webhook/sms", methods=["GET", "POST"], endpoint="sms_webhook")
    def sms_webhook():
        """SMS automation webhook. Every handled event is acknowledged the same way."""
        params = _request_params()
        phone = _first_param(params, _PHONE_KEYS)
        action = _first_param(params, _ACTION_KEYS)
        if not phone or not action:
            return jsonify({"success": False, "message": "phone and action are required"}), 400

        timestamp = params.get("timestamp")
        if isinstance(timestamp, str) and not timestamp.strip():
            timestamp = None
        try:
            outcome = container.attendance_service.handle_event(phone, action, timestamp)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StoreError:
            logger.exception("Store failure while handling webhook event")
            return jsonify({"success": False, "message": "Temporary failure"}), 500

        logger.debug("Webhook outcome: %s", container.attendance_service.describe(outcome))
        return jsonify({"success": True, "message": "Received"}), 200

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="daily_attendance")
    def daily_attendance():
        raw = (request.args.get("date") or "").strip()
        try:
            work_date = parse_iso_date(raw) if raw else now_local(container.tz).date()
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        rows = container.attendance_service.daily_report(work_date)
        return jsonify({"success": True, "date": work_date.isoformat(), "rows": rows}), 200
