import os

from config import mysql_url_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DATABASE_URL = os.getenv("DATABASE_URL") or mysql_url_from_env()

# Attachments land in <UPLOAD_ROOT>/uploads/{photos,documents}; empty means <repo>/public
UPLOAD_ROOT = os.getenv("UPLOAD_ROOT", "")
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(16 * 1024 * 1024)))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app creates missing tables on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup (clears both tables!)
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
