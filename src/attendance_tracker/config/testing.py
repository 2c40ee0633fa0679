import os

from . import db_config_from_env

JWT_SECRET = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

PORT = int(os.getenv("PORT", "5000"))

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

LOG_LEVEL = "WARNING"
LOG_FILE = None
