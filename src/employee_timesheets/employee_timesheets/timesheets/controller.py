from __future__ import annotations

import logging

from flask import Flask, redirect, render_template, request, url_for

from ..common.query_builder import ListQuery
from ..core.exceptions import ValidationError
from ..container import Container
from .repository import TIMESHEET_DEFAULT_SORT, TIMESHEET_SORT_COLUMNS

logger = logging.getLogger(__name__)


def _form_fields(form) -> dict:
    return {
        "employee_id": form.get("employee_id"),
        "start_time": form.get("start_time"),
        "end_time": form.get("end_time"),
        "summary": form.get("summary"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/timesheets", endpoint="timesheets")
    def timesheets():
        query = ListQuery.from_args(
            request.args,
            allowed_sorts=TIMESHEET_SORT_COLUMNS,
            default_sort=TIMESHEET_DEFAULT_SORT,
        )
        listing = container.timesheet_service.list_all(query)
        return render_template("timesheets/list.html", listing=listing, active_page="timesheets")

    @app.route("/timesheets/new", methods=["GET", "POST"], endpoint="timesheet_new")
    def timesheet_new():
        error = None
        status = 200
        if request.method == "POST":
            try:
                container.timesheet_service.create(**_form_fields(request.form))
                return redirect(url_for("timesheets"))
            except ValidationError as e:
                logger.info("Rejected new timesheet: %s", e)
                error, status = str(e), 400

        employees = container.employee_service.list_choices()
        return (
            render_template("timesheets/new.html", employees=employees, error=error, active_page="timesheet_new"),
            status,
        )

    @app.route("/timesheets/<int:timesheet_id>", methods=["GET", "POST"], endpoint="timesheet_detail")
    def timesheet_detail(timesheet_id: int):
        editing = request.args.get("edit") == "1"
        result = None
        submitted = None

        if request.method == "POST":
            submitted = _form_fields(request.form)
            result = container.timesheet_service.update(timesheet_id, **submitted)
            editing = not result.ok

        timesheet = container.timesheet_service.get(timesheet_id)
        employees = container.employee_service.list_choices()
        return render_template(
            "timesheets/detail.html",
            timesheet=timesheet,
            employees=employees,
            editing=editing,
            result=result,
            submitted=submitted if editing else None,
            active_page="timesheets",
        )
