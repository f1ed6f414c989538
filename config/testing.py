import os

SECRET_KEY = "test-secret"

DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")

UPLOAD_ROOT = os.getenv("UPLOAD_ROOT", "")
MAX_CONTENT_LENGTH = 4 * 1024 * 1024

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
AUTO_SEED_DB = False
