"""
GitHub API calls used by the fetch cascade.

All functions are blocking (called from the worker thread, never from the
Tk main thread). Every call returns parsed records on success and None on
any failure: transport error, non-2xx status, or a body that is not the
expected JSON shape. Callers decide what a None means for their stage.
"""

import requests

from .config import log
from .constants import (
    API_BASE_URL, API_TIMEOUT_SEC, USER_AGENT, ACCEPT_HEADER,
    MAX_ITEMS, REPO_LIMIT, PULLS_PER_REPO, REPO_AFFILIATION,
)
from . import http_client

_base_url = API_BASE_URL


def set_base_url(url):
    """Point the client at a GitHub Enterprise instance (apiBaseUrl)."""
    global _base_url
    _base_url = (url or API_BASE_URL).rstrip("/")


def _headers(credential):
    return {
        "Authorization": f"Bearer {credential}",
        "Accept": ACCEPT_HEADER,
        "User-Agent": USER_AGENT,
    }


def _get_json(credential, path, params=None, label="request"):
    """GET {base}{path}. Returns decoded JSON, or None on any failure."""
    url = f"{_base_url}{path}"
    try:
        resp = http_client.http.get(
            url, params=params, headers=_headers(credential), timeout=API_TIMEOUT_SEC,
        )
    except requests.RequestException as e:
        log.warning("GitHub %s network error: %s", label, e)
        return None

    if not 200 <= resp.status_code < 300:
        log.warning("GitHub %s failed: HTTP %d", label, resp.status_code)
        return None

    try:
        return resp.json()
    except ValueError as e:
        log.warning("GitHub %s returned malformed JSON: %s", label, e)
        return None


# ─── Identity ────────────────────────────────────────────────────

def fetch_login(credential):
    """Resolve the login handle for a credential. None means auth failure."""
    data = _get_json(credential, "/user", label="identity")
    if not isinstance(data, dict):
        return None
    login = data.get("login")
    if not isinstance(login, str) or not login:
        log.warning("GitHub identity response has no login field")
        return None
    return login


# ─── Search ──────────────────────────────────────────────────────

def search_open_pulls(credential, login, limit=MAX_ITEMS):
    """
    Open PRs authored by login, most recently updated first.
    Returns a list of (title, url) tuples, or None if the search failed.
    """
    params = {
        "q": f"is:pr is:open author:{login}",
        "sort": "updated",
        "order": "desc",
        "per_page": limit,
    }
    data = _get_json(credential, "/search/issues", params=params, label="search")
    if not isinstance(data, dict):
        return None
    items = data.get("items")
    if not isinstance(items, list):
        return None

    found = []
    for item in items:
        if not isinstance(item, dict):
            continue
        title = item.get("title")
        url = item.get("html_url")
        if isinstance(title, str) and isinstance(url, str):
            found.append((title, url))
        if len(found) >= limit:
            break
    return found


# ─── Repository fallback ─────────────────────────────────────────

def list_recent_repos(credential, limit=REPO_LIMIT):
    """Full names of repos the credential can access, most recently updated first."""
    params = {
        "affiliation": REPO_AFFILIATION,
        "sort": "updated",
        "per_page": limit,
    }
    data = _get_json(credential, "/user/repos", params=params, label="repo listing")
    if not isinstance(data, list):
        return None

    names = []
    for repo in data:
        name = repo.get("full_name") if isinstance(repo, dict) else None
        if isinstance(name, str) and name:
            names.append(name)
        if len(names) >= limit:
            break
    return names


def list_repo_pulls(credential, full_name, limit=PULLS_PER_REPO):
    """
    Open PRs of one repository as dicts with author, title, url, updated_at.
    Missing fields come back as empty strings. None if the query failed.
    """
    params = {
        "state": "open",
        "sort": "updated",
        "direction": "desc",
        "per_page": limit,
    }
    data = _get_json(credential, f"/repos/{full_name}/pulls", params=params,
                     label=f"pulls for {full_name}")
    if not isinstance(data, list):
        return None

    pulls = []
    for pr in data[:limit]:
        if not isinstance(pr, dict):
            continue
        user = pr.get("user") if isinstance(pr.get("user"), dict) else {}
        pulls.append({
            "author": _as_str(user.get("login")),
            "title": _as_str(pr.get("title")),
            "url": _as_str(pr.get("html_url")),
            "updated_at": _as_str(pr.get("updated_at")),
        })
    return pulls


def _as_str(value):
    return value if isinstance(value, str) else ""
