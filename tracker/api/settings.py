from __future__ import annotations

import os
import logging
_log = logging.getLogger(__name__)



def env_str(name: str, default: str = "") -> str:
    return str(os.getenv(name, default) or default)


def env_int(name: str, default: int) -> int:
    try:
        return int(env_str(name, str(default)) or default)
    except Exception:
        _log.debug("numeric conversion failed", exc_info=True)
        return int(default)


def data_dir() -> str:
    return env_str("DATA_DIR", "")


def bulk_upload_delay_ms() -> int:
    return max(0, env_int("BULK_UPLOAD_DELAY_MS", 0))


def default_actor() -> str:
    return env_str("DEFAULT_ACTOR", "Admin User").strip() or "Admin User"


def audit_list_limit_max() -> int:
    return max(1, env_int("AUDIT_LIST_LIMIT_MAX", 200))


def top_performers_limit() -> int:
    return max(1, env_int("TOP_PERFORMERS_LIMIT", 3))


def cors_origins_raw() -> str:
    return env_str("CORS_ORIGINS", "*")


def app_env() -> str:
    env = env_str("APP_ENV", "").strip() or env_str("ENV", "development").strip() or "development"
    return env.lower()


def is_production() -> bool:
    return app_env() in {"prod", "production"}
