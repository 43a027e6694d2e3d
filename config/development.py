import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# "file" keeps everything in DATA_FILE, "mysql" syncs one snapshot row per owner
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
DATA_FILE = os.getenv("DATA_FILE", "attendly-data.json")
SNAPSHOT_OWNER = os.getenv("SNAPSHOT_OWNER", "local")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendly"),
}

# If enabled, the snapshot table is created on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "25"))
