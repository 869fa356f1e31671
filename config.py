import os
import yaml
from pydantic import SecretStr

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default):
    """Read a setting, letting an APP_<KEY> environment variable win over env.yaml."""
    env_value = os.environ.get(f"APP_{key}")
    if env_value is None:
        return data.get(key, default)
    if isinstance(default, bool):
        return env_value.lower() in ("1", "true", "yes")
    if isinstance(default, int):
        return int(env_value)
    return env_value


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./newsletter.db")
    API_PREFIX = _get("API_PREFIX", "")
    API_PORT = _get("API_PORT", 8000)
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = _get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")

    # Public URL used to build links sent by email
    BASE_URL = _get("BASE_URL", "http://127.0.0.1:8000")

    # Signs the session and flash cookies
    HMAC_SECRET = SecretStr(_get("HMAC_SECRET", "dev-hmac-secret-change-in-production"))
    SESSION_TTL_HOURS = _get("SESSION_TTL_HOURS", 12)
    SESSION_COOKIE_SECURE = _get("SESSION_COOKIE_SECURE", False)

    # Appended to every password before hashing; never stored next to the hashes
    PEPPER = SecretStr(_get("PEPPER", "dev-pepper-change-in-production"))
    BLOCKING_POOL_SIZE = _get("BLOCKING_POOL_SIZE", 4)

    PASSWORD_RESET_TOKEN_LENGTH = _get("PASSWORD_RESET_TOKEN_LENGTH", 25)
    PASSWORD_RESET_TOKEN_TTL_MINUTES = _get("PASSWORD_RESET_TOKEN_TTL_MINUTES", 60)

    EMAIL_BASE_URL = _get("EMAIL_BASE_URL", "http://127.0.0.1:9000")
    EMAIL_SENDER = _get("EMAIL_SENDER", "newsletter@example.com")
    EMAIL_AUTHORIZATION_TOKEN = SecretStr(_get("EMAIL_AUTHORIZATION_TOKEN", "dev-postmark-token"))
    EMAIL_TIMEOUT_MILLISECONDS = _get("EMAIL_TIMEOUT_MILLISECONDS", 10000)
