from __future__ import annotations

import io

from flask import Flask, g, request, send_file

from ..common.http import make_guards, ok
from ..common.validators import require_month_year
from ..container import Container
from .schemas import (
    CheckInRequest,
    CheckOutRequest,
    DateRangeQuery,
    PageQuery,
    pagination_to_dict,
    record_to_dict,
)
from .service import require_owner


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container.auth_service)

    @app.route("/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        q = PageQuery.from_args(request.args)
        page = container.attendance_service.list_page(page=q.page, limit=q.limit)
        return ok(data=[record_to_dict(r) for r in page.items], pagination=pagination_to_dict(page))

    @app.route("/attendance/range", methods=["GET"], endpoint="attendance_range")
    @login_required
    def attendance_range():
        q = DateRangeQuery.from_args(request.args)
        records = container.attendance_service.list_by_date_range(q.start_date, q.end_date)
        return ok(data=[record_to_dict(r) for r in records])

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        records = container.attendance_service.today()
        return ok(data=[record_to_dict(r) for r in records])

    @app.route("/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def attendance_checkin():
        body = CheckInRequest.from_payload(request.get_json(silent=True))
        require_owner(g.current_user, body.employee_id)
        record = container.attendance_service.check_in(
            employee_id=body.employee_id,
            employee_name=body.employee_name,
            image=body.image,
            notes=body.notes,
            location=body.location,
        )
        return ok(201, message="Successfully checked in", data=record_to_dict(record))

    @app.route("/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def attendance_checkout():
        body = CheckOutRequest.from_payload(request.get_json(silent=True))
        require_owner(g.current_user, body.employee_id)
        record = container.attendance_service.check_out(employee_id=body.employee_id, image=body.image)
        return ok(message="Successfully checked out", data=record_to_dict(record))

    @app.route("/attendance/summary/<month>/<year>", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def attendance_summary(month: str, year: str):
        m, y = require_month_year(month, year)
        report = container.report_service.monthly_summary(m, y)
        return ok(
            data={
                "summary": report.summary.to_dict(),
                "records": [record_to_dict(r) for r in report.records],
            }
        )

    @app.route("/attendance/export", methods=["GET"], endpoint="attendance_export")
    @login_required
    def attendance_export():
        q = DateRangeQuery.optional_from_args(request.args)
        export = container.report_service.export(
            start_date=q.start_date if q else None,
            end_date=q.end_date if q else None,
        )
        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )
