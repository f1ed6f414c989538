from __future__ import annotations

import io
from datetime import date

import pytest


def _employee_form(**overrides):
    values = {
        "full_name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0101",
        "date_of_birth": "1990-04-12",
        "job_title": "Engineer",
        "department": "Engineering",
        "salary": "5000",
        "start_date": "2020-01-06",
        "end_date": "",
    }
    values.update(overrides)
    return values


def _create_employee(client, **overrides):
    response = client.post("/employees/new", data=_employee_form(**overrides))
    assert response.status_code == 302, response.get_data(as_text=True)
    return response


def test_index_redirects_to_employee_list(client):
    response = client.get("/")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/employees")


def test_create_employee_redirects_to_list(client, container):
    response = _create_employee(client)

    assert response.headers["Location"].endswith("/employees")
    employee = container.employee_service.get(1)
    assert employee.full_name == "Jane Doe"
    assert employee.photo_path is None
    assert employee.document_path is None


def test_create_underage_employee_is_rejected_with_400(client, container):
    too_young = f"{date.today().year - 17}-01-01"
    response = client.post("/employees/new", data=_employee_form(date_of_birth=too_young))

    assert response.status_code == 400
    assert "Employee must be at least 18 years old." in response.get_data(as_text=True)
    assert container.employee_service.list_choices() == []


def test_create_with_oversized_salary_is_rejected_with_400(client, container):
    response = client.post("/employees/new", data=_employee_form(salary="1e15"))

    assert response.status_code == 400
    assert "Salary must not exceed" in response.get_data(as_text=True)
    assert container.employee_service.list_choices() == []


def test_create_with_attachments_round_trips_stored_paths(client, container, app, tmp_path):
    data = _employee_form()
    data["photo"] = (io.BytesIO(b"\x89PNG fake"), "face.png")
    data["document"] = (io.BytesIO(b"%PDF-1.4 fake"), "cv.pdf")

    response = client.post("/employees/new", data=data, content_type="multipart/form-data")
    assert response.status_code == 302

    employee = container.employee_service.get(1)
    assert employee.photo_path.startswith("uploads/photos/")
    assert employee.photo_path.endswith("_face.png")
    assert employee.document_path.startswith("uploads/documents/")
    assert employee.document_path.endswith("_cv.pdf")
    assert (tmp_path / "public" / employee.photo_path).read_bytes() == b"\x89PNG fake"

    page = client.get("/employees/1").get_data(as_text=True)
    assert employee.photo_path in page
    assert employee.document_path in page

    served = client.get("/" + employee.document_path)
    assert served.status_code == 200
    assert served.data == b"%PDF-1.4 fake"


def test_employee_list_paginates_twelve_rows(client):
    for i in range(1, 13):
        _create_employee(client, full_name=f"Worker {i:02d}", email=f"w{i}@example.com")

    first = client.get("/employees?page=1").get_data(as_text=True)
    third = client.get("/employees?page=3").get_data(as_text=True)

    for i in range(1, 6):
        assert f"Worker {i:02d}" in first
    assert "Worker 06" not in first
    assert "Worker 11" in third and "Worker 12" in third
    assert "Worker 10" not in third


def test_employee_page_metadata(container, client):
    from src.employee_timesheets.employee_timesheets.common.query_builder import ListQuery

    for i in range(1, 13):
        _create_employee(client, full_name=f"Worker {i:02d}")

    page = container.employee_service.list_page(ListQuery(sort="full_name", page=3))
    assert page.total == 12
    assert page.page_count == 3
    assert [r.full_name for r in page.rows] == ["Worker 11", "Worker 12"]


def test_search_is_case_insensitive_substring(client, container):
    from src.employee_timesheets.employee_timesheets.common.query_builder import ListQuery

    for name in ("Jane Doe", "ajanet", "Janet", "Bob Stone"):
        _create_employee(client, full_name=name)

    page = container.employee_service.list_page(ListQuery(search="Jane", sort="full_name"))
    assert sorted(r.full_name for r in page.rows) == ["Jane Doe", "Janet", "ajanet"]
    assert page.total == 3


def test_search_treats_wildcards_literally(client, container):
    from src.employee_timesheets.employee_timesheets.common.query_builder import ListQuery

    _create_employee(client, full_name="Ann Lee")
    page = container.employee_service.list_page(ListQuery(search="%", sort="full_name"))
    assert page.total == 0


def test_search_matches_non_ascii_names(client, container):
    from src.employee_timesheets.employee_timesheets.common.query_builder import ListQuery

    _create_employee(client, full_name="Émile Zola")
    _create_employee(client, full_name="Bob Stone")

    for term in ("Émile", "ZOLA", "mile z"):
        page = container.employee_service.list_page(ListQuery(search=term, sort="full_name"))
        assert [r.full_name for r in page.rows] == ["Émile Zola"], term


def test_sort_by_salary_desc_is_non_increasing(client, container):
    from src.employee_timesheets.employee_timesheets.common.query_builder import ListQuery
    from src.employee_timesheets.employee_timesheets.core.enums import SortOrder

    for salary in ("3000", "12000", "4500.5", "9000", "4500.5"):
        _create_employee(client, salary=salary)

    page = container.employee_service.list_page(ListQuery(sort="salary", order=SortOrder.DESC))
    salaries = [r.salary for r in page.rows]
    assert salaries == sorted(salaries, reverse=True)
    assert salaries[0] == 12000


def test_unknown_sort_column_is_ignored(client):
    _create_employee(client)
    response = client.get("/employees", query_string={"sort": "full_name;DROP TABLE employees", "order": "desc"})
    assert response.status_code == 200
    assert "Jane Doe" in response.get_data(as_text=True)


def test_employee_detail_404(client):
    response = client.get("/employees/999")
    assert response.status_code == 404
    assert "Employee not found" in response.get_data(as_text=True)


def test_employee_update_success_and_error(client, container):
    _create_employee(client)

    ok = client.post("/employees/1", data=_employee_form(full_name="Jane Smith", salary="3000"))
    assert ok.status_code == 200
    assert "Employee updated successfully!" in ok.get_data(as_text=True)
    assert container.employee_service.get(1).full_name == "Jane Smith"

    bad = client.post("/employees/1", data=_employee_form(full_name="Janet Draft", salary="100"))
    body = bad.get_data(as_text=True)
    assert bad.status_code == 200
    assert "salary must be at least $3000" in body
    # the unsaved edit stays in the form
    assert 'value="Janet Draft"' in body
    assert container.employee_service.get(1).full_name == "Jane Smith"


def test_employee_edit_mode_is_query_selected(client):
    _create_employee(client)
    assert "<form" not in client.get("/employees/1").get_data(as_text=True).split("<main>")[1]
    assert 'name="salary"' in client.get("/employees/1?edit=1").get_data(as_text=True)


def _create_timesheet(client, **overrides):
    data = {"employee_id": "1", "start_time": "2025-03-03T09:00", "end_time": "2025-03-03T17:00", "summary": "Shift"}
    data.update(overrides)
    return client.post("/timesheets/new", data=data)


def test_timesheet_create_list_and_detail(client):
    _create_employee(client)

    response = _create_timesheet(client)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/timesheets")

    listing = client.get("/timesheets").get_data(as_text=True)
    assert "Jane Doe" in listing
    assert "2025-03-03 09:00" in listing

    detail = client.get("/timesheets/1").get_data(as_text=True)
    assert "Shift" in detail


def test_timesheet_create_rejects_bad_window(client):
    _create_employee(client)
    response = _create_timesheet(client, start_time="2025-03-03T17:00", end_time="2025-03-03T09:00")
    assert response.status_code == 400
    assert "Start time must be before end time." in response.get_data(as_text=True)


def test_timesheet_create_rejects_dangling_employee(client):
    response = _create_timesheet(client, employee_id="42")
    assert response.status_code == 400


def test_timesheet_millisecond_window_round_trips(client, container):
    _create_employee(client)
    response = _create_timesheet(client, start_time="2025-03-03T09:00:00.000", end_time="2025-03-03T09:00:00.001")
    assert response.status_code == 302

    timesheet = container.timesheet_service.get(1)
    assert (timesheet.end_time - timesheet.start_time).total_seconds() == pytest.approx(0.001)


def test_timesheet_list_search_and_sort(client, container):
    from src.employee_timesheets.employee_timesheets.common.query_builder import ListQuery
    from src.employee_timesheets.employee_timesheets.core.enums import SortOrder

    _create_employee(client, full_name="Jane Doe")
    _create_employee(client, full_name="Bob Stone")
    _create_timesheet(client, employee_id="1", start_time="2025-03-01T09:00", end_time="2025-03-01T10:00")
    _create_timesheet(client, employee_id="2", start_time="2025-03-02T09:00", end_time="2025-03-02T10:00")
    _create_timesheet(client, employee_id="1", start_time="2025-03-03T09:00", end_time="2025-03-03T10:00")

    listing = container.timesheet_service.list_all(ListQuery(search="jane", sort="start_time", order=SortOrder.DESC))
    starts = [t.start_time for t in listing.rows]
    assert [t.full_name for t in listing.rows] == ["Jane Doe", "Jane Doe"]
    assert starts == sorted(starts, reverse=True)

    by_name = container.timesheet_service.list_all(ListQuery(sort="full_name"))
    assert [t.full_name for t in by_name.rows][0] == "Bob Stone"
    assert len(by_name.rows) == 3


def test_timesheet_update_error_is_shown_in_place(client, container):
    _create_employee(client)
    _create_timesheet(client)

    response = client.post(
        "/timesheets/1",
        data={"employee_id": "1", "start_time": "2025-03-03T18:00", "end_time": "2025-03-03T08:00", "summary": "edited"},
    )
    assert response.status_code == 200
    assert "Start time must be before end time." in response.get_data(as_text=True)
    assert container.timesheet_service.get(1).summary == "Shift"


def test_timesheet_detail_404(client):
    assert client.get("/timesheets/7").status_code == 404
