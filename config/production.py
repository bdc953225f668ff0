import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_log"),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
SHEET_CSV_PATH = os.getenv("SHEET_CSV_PATH", "")
SHEET_BACKUP_PATH = os.getenv("SHEET_BACKUP_PATH", "")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Seoul")
VIEW_CACHE_TTL_SECONDS = int(os.getenv("VIEW_CACHE_TTL_SECONDS", "30"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
