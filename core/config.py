"""Application settings read from the environment.

A `.env` file at the project root is loaded first so local development can
keep credentials out of the shell. Every setting is a module-level constant;
invalid numeric or boolean values fail fast with a `ConfigurationError`.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(PROJECT_ROOT / ".env")


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{raw}'", config_key=key)


def _float_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got '{raw}'", config_key=key)


def _bool_env(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"{key} must be a boolean, got '{raw}'", config_key=key)


# Database (read/write split, same file by default)
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///diet.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

# Generative collaborator
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
GENERATION_TIMEOUT_SECONDS = _float_env("GENERATION_TIMEOUT_SECONDS", 30.0)
USE_GENERATIVE_PLANS = _bool_env("USE_GENERATIVE_PLANS", True)

# Prompt bounds
PROMPT_MAX_FOODS = _int_env("PROMPT_MAX_FOODS", 30)
PROMPT_MAX_RECIPES_PER_MEAL = _int_env("PROMPT_MAX_RECIPES_PER_MEAL", 10)

# Planning limits
MAX_PLAN_DAYS = _int_env("MAX_PLAN_DAYS", 30)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", str(PROJECT_ROOT / "logs"))
