from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive_id
from ..core.exceptions import ValidationError
from ..container import Container


def _date_arg(value, field_name: str):
    if not value:
        raise ValidationError(f"{field_name} is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)") from None


def register(app: Flask, container: Container) -> None:
    @app.get("/api/attendance/<employee_id>/days/<work_date>")
    def attendance_day(employee_id: str, work_date: str):
        emp_id = require_positive_id(employee_id, "employee_id")
        day = _date_arg(work_date, "date")
        outcome = container.attendance_service.analyze_day(employee_id=emp_id, work_date=day)
        return jsonify({"employee_id": emp_id, **outcome.to_dict()})

    @app.get("/api/attendance/<employee_id>/period")
    def attendance_period(employee_id: str):
        emp_id = require_positive_id(employee_id, "employee_id")
        start = _date_arg(request.args.get("from"), "from")
        end = _date_arg(request.args.get("to"), "to")
        summary = container.period_summary_service.summarize(employee_id=emp_id, start=start, end=end)
        return jsonify(summary.to_dict())
