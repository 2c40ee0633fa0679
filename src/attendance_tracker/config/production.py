import os

from ..core.exceptions import ConfigurationError
from . import db_config_from_env

JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise ConfigurationError("JWT_SECRET must be set when APP_ENV=production")

DB_CONFIG = db_config_from_env()

PORT = int(os.getenv("PORT", "5000"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
