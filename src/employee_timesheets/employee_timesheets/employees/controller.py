from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from flask import Flask, redirect, render_template, request, url_for

from ..common.query_builder import ListQuery
from ..core.exceptions import ValidationError
from ..container import Container
from .repository import EMPLOYEE_DEFAULT_SORT, EMPLOYEE_SORT_COLUMNS

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("full_name", "email", "phone", "job_title", "department", "salary", "start_date", "end_date")


def _form_fields(form: Mapping[str, str], *, with_birth_date: bool) -> Dict[str, Optional[str]]:
    fields = {name: form.get(name) for name in _EDITABLE_FIELDS}
    if with_birth_date:
        fields["date_of_birth"] = form.get("date_of_birth")
    return fields


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("employees"))

    @app.route("/employees", endpoint="employees")
    def employees():
        query = ListQuery.from_args(
            request.args,
            allowed_sorts=EMPLOYEE_SORT_COLUMNS,
            default_sort=EMPLOYEE_DEFAULT_SORT,
        )
        page = container.employee_service.list_page(query)
        return render_template("employees/list.html", page=page, active_page="employees")

    @app.route("/employees/new", methods=["GET", "POST"], endpoint="employee_new")
    def employee_new():
        if request.method == "POST":
            try:
                container.employee_service.create(
                    **_form_fields(request.form, with_birth_date=True),
                    photo=request.files.get("photo"),
                    document=request.files.get("document"),
                )
                return redirect(url_for("employees"))
            except ValidationError as e:
                logger.info("Rejected new employee: %s", e)
                return render_template("employees/new.html", error=str(e), active_page="employee_new"), 400

        return render_template("employees/new.html", error=None, active_page="employee_new")

    @app.route("/employees/<int:employee_id>", methods=["GET", "POST"], endpoint="employee_detail")
    def employee_detail(employee_id: int):
        editing = request.args.get("edit") == "1"
        result = None
        submitted = None

        if request.method == "POST":
            submitted = _form_fields(request.form, with_birth_date=False)
            result = container.employee_service.update(employee_id, **submitted)
            # Back to view mode only once the save went through.
            editing = not result.ok

        employee = container.employee_service.get(employee_id)
        return render_template(
            "employees/detail.html",
            employee=employee,
            editing=editing,
            result=result,
            submitted=submitted if editing else None,
            active_page="employees",
        )
