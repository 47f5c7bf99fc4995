"""
Fetch worker - the identity -> search -> repo-scan cascade.

run_cascade() is a plain blocking function so it can be exercised
synchronously (tests, `--once`). spawn_fetch() runs it on a short-lived
daemon thread and drops the single outcome into the mailbox. The thread is
never joined and never cancelled; its only observable effect is send().
"""

import threading
from datetime import datetime, timezone

from .config import log, mask_credential
from .constants import MAX_ITEMS
from .models import FetchOutcome, PullRequestRef
from . import api


def run_cascade(credential) -> FetchOutcome:
    """Run one fetch cycle. Never raises for remote failures."""
    # ── 1. Identify ──────────────────────────
    login = api.fetch_login(credential)
    if login is None:
        log.warning("GitHub identity lookup failed (%s) - disconnected", mask_credential(credential))
        return FetchOutcome.disconnected()

    # ── 2. Search ────────────────────────────
    found = api.search_open_pulls(credential, login, MAX_ITEMS)
    if found is None:
        log.warning("PR search failed for %s - keeping connection, no items", login)
        return FetchOutcome.connected_empty()
    if found:
        items = tuple(PullRequestRef(title, url) for title, url in found[:MAX_ITEMS])
        log.info("PR search OK | login=%s | items=%d", login, len(items))
        return FetchOutcome(connected=True, items=items)

    # ── 3. Fallback: scan recent repositories ──
    repos = api.list_recent_repos(credential)
    if repos is None:
        log.warning("Repo listing failed for %s - no items", login)
        return FetchOutcome.connected_empty()

    items = _scan_repos(credential, login, repos)
    log.info("Repo scan OK | login=%s | repos=%d | items=%d", login, len(repos), len(items))
    return FetchOutcome(connected=True, items=items)


def _scan_repos(credential, login, repos):
    matches = []
    for full_name in repos:
        pulls = api.list_repo_pulls(credential, full_name)
        if pulls is None:
            log.info("Skipping %s (pull listing failed)", full_name)
            continue
        for pr in pulls:
            if pr["author"] == login:
                matches.append((pr["updated_at"], PullRequestRef(pr["title"], pr["url"])))

    # sorted() is stable with reverse=True, so ties keep encounter order
    matches.sort(key=lambda m: recency_key(m[0]), reverse=True)
    return tuple(ref for _, ref in matches[:MAX_ITEMS])


def recency_key(updated_at):
    """
    Sort key for an ISO-8601 `updated_at` string.

    Parseable timestamps compare as real instants (naive ones are taken as
    UTC). Anything else ranks below every parseable value, and those
    compare as plain strings.
    """
    try:
        ts = datetime.fromisoformat(updated_at.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return (0, updated_at or "")
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return (1, ts)


# ─── Background execution ────────────────────────────────────────

def _run_and_deliver(credential, mailbox):
    outcome = None
    try:
        outcome = run_cascade(credential)
    except Exception as e:
        log.error("Fetch worker crashed: %s", e, exc_info=True)
        outcome = FetchOutcome.disconnected()
    finally:
        mailbox.send(outcome if outcome is not None else FetchOutcome.disconnected())


def spawn_fetch(credential, mailbox):
    """Start one detached fetch cycle. Returns the (unjoined) thread."""
    t = threading.Thread(
        target=_run_and_deliver,
        args=(credential, mailbox),
        name="github-fetch",
        daemon=True,
    )
    t.start()
    return t
