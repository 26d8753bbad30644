import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def _get_bool_env_var(value: str) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "t", "yes", "y"}


def _get_list_env_var(value: str) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


# Key-value cache
REDIS_URL = os.environ.get("REDIS_URL") or "redis://localhost:6379"
REDIS_SOCKET_TIMEOUT = float(os.environ.get("REDIS_SOCKET_TIMEOUT", "5.0"))

# Search index; an empty ELASTIC_URL disables mirroring
ELASTIC_URL = os.environ.get("ELASTIC_URL", "http://localhost:9200")
ELASTIC_INDEX = os.environ.get("ELASTIC_INDEX") or "feeds"
ELASTIC_TIMEOUT = float(os.environ.get("ELASTIC_TIMEOUT", "5.0"))

# Authentication
SECRET_KEY = os.environ.get("SECRET_KEY") or "dev"
ADMINISTRATORS = _get_list_env_var(os.environ.get("ADMINISTRATORS"))

# Logging configuration
from feedhub.logger import logger
DEBUG = _get_bool_env_var(os.environ.get("DEBUG"))
FLASK_RUN_FROM_CLI = os.environ.get("FLASK_RUN_FROM_CLI")
if FLASK_RUN_FROM_CLI or DEBUG:
    logger.setLevel(logging.DEBUG)
