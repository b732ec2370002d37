"""
Central configuration for the packing list processor.

Values are module constants, optionally overridden from the environment.
Import them where needed; no runtime logic lives here beyond reading env vars.
"""
import os
from typing import List, Optional

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    if value.lower() in {"1", "true", "yes", "on"}:
        return True
    if value.lower() in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


# Logging
LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
LOG_DIR = _get_env("LOG_DIR", os.path.join(BASE_DIR, "logs"))
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# API
API_TITLE = "Packing List Processor API"
API_VERSION = "1.0.0"
API_PREFIX = _get_env("API_PREFIX", "/api/v1")
CORS_ORIGINS: List[str] = [o.strip() for o in _get_env("CORS_ORIGINS", "*").split(",")]

# Carton ranges. Order matters: longer tokens must be tried before the
# tokens they contain ("-->" before "->" before "-").
RANGE_SEPARATORS: List[str] = ["-->", "–>", "->", "→", "–", "-", "to"]
# Unset means ranges of any length are expanded
MAX_CTN_RANGE_SIZE: Optional[int] = _get_int("MAX_CTN_RANGE_SIZE", 0) or None

# Field groups
STRICT_BLOCK_GROUPS = _get_bool("STRICT_BLOCK_GROUPS", False)

# Country of origin
UNKNOWN_COUNTRY_CODE = "N/A"
COUNTRIES_FILE = os.path.join(BASE_DIR, "utils", "countries.json")
