import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hostel_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Write transactions take explicit row locks; reads run on a read-only snapshot
WRITE_ISOLATION = os.getenv("WRITE_ISOLATION", "READ COMMITTED")
READ_ISOLATION = os.getenv("READ_ISOLATION", "REPEATABLE READ")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo rooms on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Identity granted the admin role at startup (empty disables)
BOOTSTRAP_ADMIN_IDENTITY = os.getenv("BOOTSTRAP_ADMIN_IDENTITY", "admin")
