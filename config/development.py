import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "memory" serves data/seed.json; "mysql" reads the *_c tables below
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")
SEED_PATH = os.getenv("SEED_PATH", os.path.join(os.path.dirname(__file__), "..", "data", "seed.json"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

TOP_PERFORMERS_LIMIT = int(os.getenv("TOP_PERFORMERS_LIMIT", "10"))
RECENT_SESSIONS_LIMIT = int(os.getenv("RECENT_SESSIONS_LIMIT", "6"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
