import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hostel_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

WRITE_ISOLATION = os.getenv("WRITE_ISOLATION", "READ COMMITTED")
READ_ISOLATION = os.getenv("READ_ISOLATION", "REPEATABLE READ")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

BOOTSTRAP_ADMIN_IDENTITY = os.getenv("BOOTSTRAP_ADMIN_IDENTITY", "")
