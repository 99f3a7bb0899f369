from __future__ import annotations

import os
from pathlib import Path

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover - optional dependency
    load_dotenv = None

if load_dotenv:
    _repo_root = Path(__file__).resolve().parents[3]
    load_dotenv(dotenv_path=_repo_root / ".env")


def _env_int(name: str, default: int) -> int:
    """정수형 환경변수를 안전하게 파싱."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except Exception:
        return default


# ==========================================
# 저장 경로
# ==========================================

REPO_ROOT = Path(__file__).resolve().parents[3]
DATA_DIR = Path(os.getenv("DATA_DIR", str(REPO_ROOT / "data")))

FEED_PATH = os.getenv("FEED_PATH", str(DATA_DIR / "feed.json"))
FINGERPRINTS_PATH = os.getenv("FINGERPRINTS_PATH", str(DATA_DIR / "fingerprints.json"))
BLACKLIST_PATH = os.getenv("BLACKLIST_PATH", str(DATA_DIR / "blacklist.json"))
REJECTION_LOG_PATH = os.getenv("REJECTION_LOG_PATH", str(DATA_DIR / "rejection_log.json"))
SETTINGS_PATH = os.getenv("SETTINGS_PATH", str(DATA_DIR / "settings.json"))

# ==========================================
# 수용(admission) 규칙
# ==========================================

MAX_AGE_MINUTES = _env_float("MAX_AGE_MINUTES", 120.0)
MAX_DISCREPANCY_MINUTES = _env_float("MAX_DISCREPANCY_MINUTES", 10.0)
FINGERPRINT_CONTENT_CHARS = _env_int("FINGERPRINT_CONTENT_CHARS", 200)
TITLE_PREFIX_CHARS = _env_int("TITLE_PREFIX_CHARS", 20)
REJECTION_LOG_LIMIT = _env_int("REJECTION_LOG_LIMIT", 50)

# ==========================================
# 새로고침 주기 (분)
# ==========================================

REFRESH_INTERVAL_MIN = 1
REFRESH_INTERVAL_MAX = 10
DEFAULT_REFRESH_INTERVAL = _env_int("DEFAULT_REFRESH_INTERVAL", 1)

SCREENSHOT_URL_TEMPLATE = os.getenv(
    "SCREENSHOT_URL_TEMPLATE",
    "https://picsum.photos/seed/{fingerprint}/800/600",
)
