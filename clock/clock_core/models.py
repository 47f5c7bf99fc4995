"""
Records exchanged between the fetch worker and the widget.

PullRequestRef and FetchOutcome are frozen: once the worker hands an
outcome to the mailbox, nobody can mutate it underneath the UI thread.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from .constants import MAX_ITEMS, THEME

_TOKEN_RE = re.compile(r"[A-Za-z0-9-]+")
_ISSUE_KEY_RE = re.compile(r"[A-Z]{2,}-[0-9]+")


class ConnectionStatus(Enum):
    UNKNOWN = "unknown"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


def status_color(status, theme=THEME):
    return theme[status.value]


@dataclass(frozen=True)
class PullRequestRef:
    title: str
    url: str


def find_issue_key(title):
    """First Jira-style key (PROJ-123) in a PR title, or None."""
    for match in _TOKEN_RE.finditer(title or ""):
        if _ISSUE_KEY_RE.fullmatch(match.group(0)):
            return match.group(0)
    return None


@dataclass(frozen=True)
class FetchOutcome:
    """
    Terminal result of one fetch cycle.

    Normalized on construction: items are capped at MAX_ITEMS and a
    disconnected outcome never carries items.
    """

    connected: bool
    items: tuple = field(default_factory=tuple)

    def __post_init__(self):
        items = tuple(self.items)[:MAX_ITEMS] if self.connected else ()
        object.__setattr__(self, "items", items)

    @classmethod
    def disconnected(cls):
        return cls(connected=False)

    @classmethod
    def connected_empty(cls):
        return cls(connected=True)

    @property
    def status(self) -> ConnectionStatus:
        return ConnectionStatus.CONNECTED if self.connected else ConnectionStatus.DISCONNECTED
