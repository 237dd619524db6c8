from __future__ import annotations

from datetime import datetime
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, to_iso
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, LeaveSpan


def _iso(value: Optional[datetime]) -> Optional[str]:
    return to_iso(value) if value else None


def record_to_json(record: AttendanceRecord) -> dict:
    return {
        "employeeId": record.employee_id,
        "date": record.work_date.isoformat(),
        "checkIn": _iso(record.check_in),
        "checkOut": _iso(record.check_out),
        "status": record.status.value,
        "totalHours": record.total_hours,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/<employee_id>/session", methods=["GET"], endpoint="attendance_session")
    def attendance_session(employee_id: str):
        s = service.get_session(employee_id)
        return jsonify(
            {
                "isCheckedIn": s.is_checked_in,
                "isCheckedOut": s.is_checked_out,
                "checkInTime": _iso(s.check_in_time),
                "checkOutTime": _iso(s.check_out_time),
                "elapsedLabel": s.elapsed_label,
            }
        )

    @app.route("/api/attendance/<employee_id>/check-in", methods=["POST"], endpoint="attendance_check_in")
    def attendance_check_in(employee_id: str):
        try:
            record = service.check_in(employee_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 409
        return jsonify({"success": True, "record": record_to_json(record)})

    @app.route("/api/attendance/<employee_id>/check-out", methods=["POST"], endpoint="attendance_check_out")
    def attendance_check_out(employee_id: str):
        try:
            record = service.check_out(employee_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 409
        return jsonify({"success": True, "record": record_to_json(record)})

    @app.route("/api/attendance/<employee_id>/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history(employee_id: str):
        days = request.args.get("days", default=DEFAULT_HISTORY_DAYS, type=int)
        rows = service.get_history(employee_id, days=days)
        return jsonify(
            [
                {
                    "date": r.work_date.isoformat(),
                    "dayOfWeek": r.day_of_week,
                    "checkIn": r.check_in,
                    "checkOut": r.check_out,
                    "totalHours": r.total_hours,
                    "status": r.status,
                }
                for r in rows
            ]
        )

    @app.route("/api/attendance/<employee_id>/presence", methods=["GET", "POST"], endpoint="attendance_presence")
    def attendance_presence(employee_id: str):
        # POST may carry approved leave spans: [{"startDate": ..., "endDate": ...}]
        leaves = []
        if request.method == "POST":
            try:
                for item in request.get_json(silent=True) or []:
                    leaves.append(
                        LeaveSpan(
                            employee_id=employee_id,
                            start_date=parse_iso_date(item["startDate"]),
                            end_date=parse_iso_date(item["endDate"]),
                        )
                    )
            except (KeyError, TypeError, ValueError):
                return jsonify({"success": False, "message": "Invalid leave spans"}), 400

        info = service.get_presence(employee_id, leaves=leaves)
        return jsonify({"status": info.status.value, "label": info.label, "checkedInAt": _iso(info.checked_in_at)})
