from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive_id
from ..core.exceptions import ValidationError
from ..container import Container


def _int_arg(name: str, *, required: bool = False):
    raw = request.args.get(name)
    if raw is None or raw == "":
        if required:
            raise ValidationError(f"{name} is required")
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


def register(app: Flask, container: Container) -> None:
    @app.get("/api/dashboard/metrics")
    def dashboard_metrics():
        raw_date = request.args.get("date")
        work_date = None
        if raw_date:
            try:
                work_date = parse_iso_date(raw_date)
            except ValueError:
                raise ValidationError("date must be a date (YYYY-MM-DD)") from None
        site_id = _int_arg("site_id")
        metrics = container.dashboard_service.metrics(work_date=work_date, site_id=site_id)
        return jsonify(metrics.to_dict())

    @app.get("/api/dashboard/monthly-summary/<employee_id>")
    def monthly_summary(employee_id: str):
        emp_id = require_positive_id(employee_id, "employee_id")
        today = container.normalizer.today()
        year = _int_arg("year") or today.year
        month = _int_arg("month") or today.month
        summary = container.monthly_summary_service.summarize(employee_id=emp_id, year=year, month=month)
        return jsonify(summary.to_dict())
