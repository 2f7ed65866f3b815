import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_CONFIG = {
    "api_base_url": os.getenv("API_BASE_URL", "http://localhost:3000/api"),
    "remote_sync_enabled": bool(int(os.getenv("REMOTE_SYNC_ENABLED", "1"))),
    "request_timeout": float(os.getenv("REQUEST_TIMEOUT", "5")),
    "local_storage_path": os.getenv("LOCAL_STORAGE_PATH", "instance/lab_attendance.json"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

MAX_CONTENT_LENGTH = 16 * 1024 * 1024

AUTO_SEED = bool(int(os.getenv("AUTO_SEED", "0")))
