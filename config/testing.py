SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
SEED_PATH = ""

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "attendance_db_test",
}

TOP_PERFORMERS_LIMIT = 10
RECENT_SESSIONS_LIMIT = 6

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
