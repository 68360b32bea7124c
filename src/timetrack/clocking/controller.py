from __future__ import annotations

import io
import logging
from functools import wraps

from flask import Flask, jsonify, request, send_file, session

from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import LocationErrorKind, Role
from ..core.exceptions import DomainError, RecordNotSavedError, ValidationError
from ..container import Container
from ..location.provider import CoordinatesProvider, FailingProvider

logger = logging.getLogger(__name__)


def _fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register(app: Flask, container: Container) -> None:
    clock = container.clock_service
    records = container.record_service
    now = container.clock

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "employee_id" not in session:
                return _fail("Please sign in to continue", 401)
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "employee_id" not in session:
                return _fail("Please sign in to continue", 401)
            if session.get("role") != Role.ADMIN.value:
                return _fail("Administrator access required", 403)
            return view(*args, **kwargs)

        return wrapper

    def domain_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except RecordNotSavedError as e:
                return jsonify({"success": False, "message": str(e), "record": records.to_ui(e.record)}), 503
            except DomainError as e:
                return _fail(str(e), 400)
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return _fail("Internal error, please try again", 500)

        return wrapper

    def _current_employee() -> str:
        return str(session["employee_id"])

    def _provider_from(payload: dict):
        error_kind = payload.get("location_error")
        if error_kind:
            try:
                return FailingProvider(LocationErrorKind(str(error_kind).upper()))
            except ValueError:
                return FailingProvider(LocationErrorKind.POSITION_UNAVAILABLE)
        lat, lng = payload.get("latitude"), payload.get("longitude")
        if lat is None or lng is None:
            return None
        try:
            return CoordinatesProvider(float(lat), float(lng))
        except (TypeError, ValueError):
            raise ValidationError("latitude/longitude must be numbers")

    def _manual_time_from(payload: dict):
        value = payload.get("manual_time")
        if not value:
            return None
        try:
            manual_time = parse_iso_datetime(str(value))
        except ValueError:
            raise ValidationError("manual_time must be an ISO-8601 timestamp")
        if manual_time > now():
            raise ValidationError("manual_time cannot be in the future")
        return manual_time

    @app.route("/api/clock/status", methods=["GET"], endpoint="clock_status")
    @login_required
    def clock_status():
        return jsonify({"success": True, "timer": clock.status(_current_employee()).as_dict()})

    @app.route("/api/clock/in", methods=["POST"], endpoint="clock_in")
    @login_required
    @domain_errors
    def clock_in():
        payload = request.get_json(silent=True) or {}
        view = clock.clock_in(
            _current_employee(),
            employee_name=session.get("name"),
            manual_time=_manual_time_from(payload),
            provider=_provider_from(payload),
        )
        message = "Clocked in successfully"
        if view.location_error:
            message = f"Clocked in, location not available: {view.location_error}"
        return jsonify({"success": True, "message": message, "timer": view.as_dict()})

    @app.route("/api/clock/out", methods=["POST"], endpoint="clock_out")
    @login_required
    @domain_errors
    def clock_out():
        record = clock.clock_out(_current_employee())
        return jsonify({"success": True, "message": "Clocked out successfully", "record": records.to_ui(record)})

    @app.route("/api/breaks/types", methods=["GET"], endpoint="break_types")
    @login_required
    def break_types():
        return jsonify({"success": True, "types": list(clock.break_types)})

    @app.route("/api/breaks/start", methods=["POST"], endpoint="break_start")
    @login_required
    @domain_errors
    def break_start():
        payload = request.get_json(silent=True) or {}
        break_type = str(payload.get("type") or "")
        view = clock.start_break(_current_employee(), break_type)
        return jsonify({"success": True, "message": f"You're now on {break_type} break", "timer": view.as_dict()})

    @app.route("/api/breaks/end", methods=["POST"], endpoint="break_end")
    @login_required
    @domain_errors
    def break_end():
        view = clock.end_break(_current_employee())
        return jsonify({"success": True, "message": "You're back on duty", "timer": view.as_dict()})

    @app.route("/api/records", methods=["GET"], endpoint="my_records")
    @login_required
    @domain_errors
    def my_records():
        try:
            limit = int(request.args.get("limit", 30))
        except ValueError:
            raise ValidationError("limit must be an integer")
        if limit <= 0:
            raise ValidationError("limit must be positive")
        return jsonify({"success": True, "records": records.history_ui(_current_employee(), limit=limit)})

    @app.route("/api/records.csv", methods=["GET"], endpoint="records_csv")
    @admin_required
    def records_csv():
        csv_bytes = records.export_csv().encode("utf-8-sig")
        filename = f"time_records_{now().strftime('%Y%m%d')}.csv"
        return send_file(
            io.BytesIO(csv_bytes),
            mimetype="text/csv",
            as_attachment=True,
            download_name=filename,
        )
