import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "mysql" keeps collections in the kv_store table, "memory" keeps them in-process.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "gradewise_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, the kv_store table is created on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: create the demo teacher account when no user exists
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
