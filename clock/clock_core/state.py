"""
SchedulerState and WidgetState - the two pieces of mutable state.

All mutations happen on the Tkinter main thread. No locks needed: the
fetch worker never sees either object, it only talks to the mailbox.
"""

from dataclasses import dataclass, field
from typing import Optional

from .clockface import HourFormat, TimeFormat
from .models import ConnectionStatus


@dataclass
class SchedulerState:
    last_trigger_time: Optional[float] = None   # None -> never triggered, first check fires
    fetch_in_flight: bool = False

    def interval_elapsed(self, now, interval) -> bool:
        if self.last_trigger_time is None:
            return True
        return now - self.last_trigger_time >= interval

    def on_triggered(self, now):
        """A worker was just started."""
        self.last_trigger_time = now
        self.fetch_in_flight = True

    def on_outcome_consumed(self):
        self.fetch_in_flight = False


@dataclass
class WidgetState:
    # ── GitHub panel ──────────────────────────────────────────
    status: ConnectionStatus = ConnectionStatus.UNKNOWN
    items: tuple = field(default_factory=tuple)

    # ── Clock face ────────────────────────────────────────────
    hour_format: HourFormat = HourFormat.H24
    time_format: TimeFormat = TimeFormat.HH_MM_SS

    def on_fetch_started(self):
        """Status goes back to UNKNOWN while a cycle is in flight."""
        self.status = ConnectionStatus.UNKNOWN

    def apply_outcome(self, outcome):
        """Replace status and items wholesale from a consumed outcome."""
        self.status = outcome.status
        self.items = tuple(outcome.items)

    def cycle_time_format(self):
        self.time_format = self.time_format.next()

    def toggle_hour_format(self):
        self.hour_format = self.hour_format.toggled()
