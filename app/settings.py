from __future__ import annotations

import os

PAGE_TITLE = "DPF Admin - Panel Pengelolaan"
PAGE_ICON = "🕌"
PAGE_LAYOUT = "wide"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    return int(raw) if raw.isdigit() and int(raw) > 0 else default


BATCH_CONCURRENCY = _int_env("DPF_BATCH_CONCURRENCY", 4)
DEFAULT_PER_PAGE = _int_env("DPF_PER_PAGE", 15)
LOG_LEVEL = os.getenv("DPF_LOG_LEVEL", "INFO").upper()
