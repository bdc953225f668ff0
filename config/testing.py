import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_log_test"),
}

STORE_BACKEND = "sheet"
SHEET_CSV_PATH = os.getenv("SHEET_CSV_PATH", "data/attendance_sheet_test.csv")
SHEET_BACKUP_PATH = ""

TIMEZONE = "Asia/Seoul"
VIEW_CACHE_TTL_SECONDS = 30

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
