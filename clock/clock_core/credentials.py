"""
GitHub credential resolution.

Order: GITHUB_TOKEN, CHRONO_GITHUB_TOKEN (a local .env is loaded first but
never overrides the real environment), then the token file in the config
directory. Blank values count as absent.
"""

import os

from dotenv import load_dotenv

from . import config
from .constants import TOKEN_ENV_VARS, TOKEN_FILE_NAME

_dotenv_loaded = False


def _load_dotenv_once():
    global _dotenv_loaded
    if not _dotenv_loaded:
        load_dotenv(override=False)
        _dotenv_loaded = True


def token_file():
    return config.BASE_DIR / TOKEN_FILE_NAME


def load_credential():
    """Return the current token or None. Cheap enough to call per trigger."""
    _load_dotenv_once()

    for name in TOKEN_ENV_VARS:
        token = os.environ.get(name, "").strip()
        if token:
            return token

    path = token_file()
    try:
        token = path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return token or None
