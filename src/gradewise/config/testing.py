SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "gradewise_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
