"""WSGI entry point: ``flask --app app run`` or ``gunicorn app:app``."""
from src.employee_timesheets.employee_timesheets.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=bool(app.config.get("DEBUG", False)))
