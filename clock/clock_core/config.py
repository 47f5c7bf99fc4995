"""
Paths, logging, config load/save, safe_print, credential masking.
"""

import os
import json
import sys
import logging
from pathlib import Path


# ─── Paths ───────────────────────────────────────────────────────
# Shared with the token file so one directory holds everything per user.
_FOLDER_NAME = "chrono"

BASE_DIR = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / _FOLDER_NAME

CONFIG_FILE = BASE_DIR / "config.json"
LOG_FILE = BASE_DIR / "clock.log"


# ─── Safe print (no crash when stdout is detached) ───────────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except Exception:
        pass


# ─── Logging ─────────────────────────────────────────────────────

log = logging.getLogger("commit_clock")


def setup_logging(level=logging.INFO):
    """File log (truncated past 1 MB) plus a console handler."""
    BASE_DIR.mkdir(parents=True, exist_ok=True)

    try:
        if LOG_FILE.exists() and LOG_FILE.stat().st_size > 1_000_000:
            LOG_FILE.write_text("")
    except OSError:
        pass

    logging.basicConfig(
        filename=str(LOG_FILE),
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        encoding="utf-8",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    log.addHandler(console_handler)


def mask_credential(token):
    """Loggable form of a token: first 4 chars only."""
    if not token:
        return "<none>"
    return token[:4] + "..."


# ─── Config Management ──────────────────────────────────────────

def load_config():
    """Load config from disk. Returns dict or None."""
    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            return None
        return data if isinstance(data, dict) else None
    return None


def save_config(config):
    """Save config dict to disk."""
    BASE_DIR.mkdir(parents=True, exist_ok=True)
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
    log.info("Config saved to %s", CONFIG_FILE)
