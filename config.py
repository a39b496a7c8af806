import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _setting(key, default=None):
    # Process environment wins over env.yaml so secrets can stay out of files
    return os.environ.get(key, data.get(key, default))


class ApplicationConfig:
    DB_URI = _setting("DB_URI", "sqlite+aiosqlite:///./tax_jurisdiction.db")
    API_PREFIX = _setting("API_PREFIX", "/api")
    API_PORT = int(_setting("API_PORT", 4001))
    API_HOST = _setting("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["*"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _setting("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(int(_setting("ENABLE_LOGGING_MIDDLEWARE", 1)))
    CREATE_TABLES_ON_STARTUP = bool(int(_setting("CREATE_TABLES_ON_STARTUP", 0)))
    JWT_SECRET = _setting("JWT_SECRET")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 7))
    MACHINE_TOKEN = _setting("MACHINE_TOKEN")
    SURVEY_BASE_URL = _setting("SURVEY_BASE_URL", "http://localhost:5173")
