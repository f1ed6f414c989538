import os
import urllib.parse


def get_settings_module() -> str:
    # APP_ENV selects the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def mysql_url_from_env(default_password: str = "") -> str:
    """Build a mysql+mysqlconnector URL from DB_* variables.

    The password is URL-encoded so characters like '@' stay safe.
    """
    user = os.getenv("DB_USER", "root")
    password = urllib.parse.quote_plus(os.getenv("DB_PASSWORD", default_password))
    host = os.getenv("DB_HOST", "localhost")
    port = int(os.getenv("DB_PORT", "3306"))
    name = os.getenv("DB_NAME", "employee_timesheets")
    return f"mysql+mysqlconnector://{user}:{password}@{host}:{port}/{name}"
