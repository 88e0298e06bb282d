import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "clockin_crew"),
}

DEBUG = True

# Check-ins after this hour (24h clock) are recorded as late.
LATE_CUTOFF_HOUR = int(os.getenv("LATE_CUTOFF_HOUR", "9"))
RECENT_LIMIT = int(os.getenv("RECENT_LIMIT", "7"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo profiles on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
