import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_log"),
}

# "mysql" (normalized table, server-side filtering) or "sheet" (CSV export, scan-only)
STORE_BACKEND = os.getenv("STORE_BACKEND", "sheet")
SHEET_CSV_PATH = os.getenv("SHEET_CSV_PATH", "data/attendance_sheet.csv")
# Secondary copy of every check-in in sheet format; empty disables it
SHEET_BACKUP_PATH = os.getenv("SHEET_BACKUP_PATH", "")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Seoul")
VIEW_CACHE_TTL_SECONDS = int(os.getenv("VIEW_CACHE_TTL_SECONDS", "30"))

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
