from __future__ import annotations

from pathlib import Path

from . import settings as _settings

APP_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = Path(_settings.data_dir() or (APP_ROOT / "data"))
GRADEBOOK_DIR = DATA_DIR / "gradebook"
AUDIT_DIR = DATA_DIR / "audit"
BULK_UPLOAD_DELAY_MS = _settings.bulk_upload_delay_ms()
DEFAULT_ACTOR = _settings.default_actor()
AUDIT_LIST_LIMIT_MAX = _settings.audit_list_limit_max()
TOP_PERFORMERS_LIMIT = _settings.top_performers_limit()
