# Keeps the repository root importable for `src.employee_timesheets...` and `config`.
