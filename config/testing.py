import os

SECRET_KEY = "test-secret"

STORAGE_CONFIG = {
    "api_base_url": "http://localhost:3000/api",
    "remote_sync_enabled": False,
    "request_timeout": 1,
    "local_storage_path": os.getenv("LOCAL_STORAGE_PATH", "instance/test_lab_attendance.json"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

MAX_CONTENT_LENGTH = 16 * 1024 * 1024

AUTO_SEED = False
