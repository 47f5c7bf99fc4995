"""
FetchScheduler - decides when a fetch cycle starts and collects its result.

Owned by the Tk main thread. Mutations happen only in maybe_trigger(),
trigger_now() and poll(), all called from that thread, so no locks.
"""

import time

from .config import log, mask_credential
from .constants import FETCH_INTERVAL_SEC
from .mailbox import ResultMailbox
from .models import FetchOutcome
from .state import SchedulerState
from .worker import spawn_fetch


class FetchScheduler:
    """
    Single-in-flight trigger logic:
      maybe_trigger() - periodic path, gated by the interval
      trigger_now()   - manual path, ignores the interval
      poll()          - non-blocking result pickup, once per frame

    `spawn` is the worker launcher (credential, mailbox) -> Any.
    """

    def __init__(self, interval=FETCH_INTERVAL_SEC, spawn=spawn_fetch, mailbox=None):
        self.interval = interval
        self.state = SchedulerState()
        self._spawn = spawn
        self._mailbox = mailbox if mailbox is not None else ResultMailbox()

    @property
    def in_flight(self) -> bool:
        return self.state.fetch_in_flight

    @property
    def last_trigger_time(self):
        return self.state.last_trigger_time

    def maybe_trigger(self, now, credential):
        """Start a cycle if the interval has elapsed. `credential` falsy = absent."""
        if self.state.fetch_in_flight:
            return
        if not self.state.interval_elapsed(now, self.interval):
            return
        self._trigger(now, credential, reason="interval")

    def trigger_now(self, credential, now=None):
        """Manual refresh. Silently ignored while a cycle is running."""
        if self.state.fetch_in_flight:
            log.info("Manual refresh ignored: fetch already in flight")
            return
        self._trigger(time.time() if now is None else now, credential, reason="manual")

    def poll(self):
        """Return the delivered outcome (consuming it) or None."""
        outcome = self._mailbox.try_receive()
        if outcome is None:
            return None
        self.state.on_outcome_consumed()
        return outcome

    def _trigger(self, now, credential, reason):
        if not credential:
            self.state.last_trigger_time = now
            log.info("GitHub refresh (%s): no credential - disconnected", reason)
            self._mailbox.send(FetchOutcome.disconnected())
            return

        # A synthetic outcome nobody picked up yet is superseded by this cycle
        if self._mailbox.has_value:
            log.info("Dropping uncollected outcome before %s refresh", reason)
            self._mailbox.clear()
        self.state.on_triggered(now)
        log.info("GitHub refresh (%s) started with %s", reason, mask_credential(credential))
        try:
            self._spawn(credential, self._mailbox)
        except Exception as e:
            log.error("Could not start fetch worker: %s", e, exc_info=True)
            self._mailbox.send(FetchOutcome.disconnected())
