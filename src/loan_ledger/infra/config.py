from __future__ import annotations

import os

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_IMPORT_BYTES = 1024 * 1024


def log_level() -> str:
    return os.getenv("LOAN_LEDGER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def max_import_bytes() -> int:
    raw = os.getenv("LOAN_LEDGER_MAX_IMPORT_BYTES")

    if not raw:
        return DEFAULT_MAX_IMPORT_BYTES

    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"LOAN_LEDGER_MAX_IMPORT_BYTES must be an integer, got {raw!r}")

    if value <= 0:
        raise RuntimeError("LOAN_LEDGER_MAX_IMPORT_BYTES must be > 0")

    return value
