import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORAGE_BACKEND = "file"
DATA_FILE = os.getenv("DATA_FILE", "attendly-test-data.json")
SNAPSHOT_OWNER = "test"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendly_test"),
}

AUTO_INIT_DB = False

GEMINI_API_KEY = ""
GEMINI_MODEL = "gemini-2.5-flash"
LLM_TIMEOUT = 5.0
