"""
ClockApp - the main Tkinter application.

One recurring root.after() callback is the frame loop: it asks the
scheduler whether to start a fetch, picks up any delivered outcome without
blocking, and redraws. Keyboard and click handlers run on the same thread.

Background threads: ONLY the short-lived fetch worker. It never touches
Tkinter or the widget state; it hands its outcome over via the mailbox.
"""

import time
import tkinter as tk
import webbrowser
from datetime import datetime

from .clockface import parse_hour_format, parse_time_format
from .config import log, safe_print, save_config
from .constants import CLOCK_VERSION, FETCH_INTERVAL_SEC, FRAME_INTERVAL_MS
from .credentials import load_credential
from .presenter import ClockView, ViewContext
from .scheduler import FetchScheduler
from .state import WidgetState
from . import api


class ClockApp:
    """
    Owns the Tk main loop. Schedules everything via root.after():
      _frame()  - trigger check, mailbox poll, redraw   (every 200ms)

    Keys: F cycles the time format, H toggles 12/24h, R refreshes now.
    """

    def __init__(self, config=None, scheduler=None, credential_source=load_credential):
        self._config = dict(config or {})
        self._credential_source = credential_source
        self._credential = credential_source()

        interval = self._config.get("fetchIntervalSec", FETCH_INTERVAL_SEC)
        self.scheduler = scheduler or FetchScheduler(interval=interval)
        self.state = WidgetState(
            hour_format=parse_hour_format(self._config.get("hourFormat", "24")),
            time_format=parse_time_format(self._config.get("timeFormat", "hh:mm:ss")),
        )
        api.set_base_url(self._config.get("apiBaseUrl"))

        self._root = None
        self._view = None

    def run(self):
        """Start the widget. Blocks on Tk mainloop. Call from main thread."""
        self._root = tk.Tk()
        self._root.title("")
        self._root.geometry("640x260")
        self._root.resizable(False, False)
        self._root.protocol("WM_DELETE_WINDOW", self.stop)

        self._view = ClockView(self._root, ViewContext(), self.refresh_now, webbrowser.open)

        self._root.bind("<KeyPress-f>", lambda _e: self._on_cycle_time_format())
        self._root.bind("<KeyPress-h>", lambda _e: self._on_toggle_hour_format())
        self._root.bind("<KeyPress-r>", lambda _e: self.refresh_now())

        self._root.after(0, self._frame)

        log.info(
            "v%s started (interval=%ds, credential=%s)",
            CLOCK_VERSION, self.scheduler.interval,
            "present" if self._credential else "absent",
        )
        safe_print("commit-clock running.\n")

        try:
            self._root.mainloop()
        finally:
            log.info("ClockApp shut down.")

    def stop(self):
        """Window close: leave the main loop and tear the window down."""
        if self._root is None:
            return
        log.info("Window closed.")
        self._root.quit()
        self._root.destroy()
        self._root = None

    # ─── Frame loop ──────────────────────────────────────────

    def _frame(self):
        try:
            self.tick(time.time())
            if self._view is not None:
                self._view.render(self.state, datetime.now(), self.scheduler.in_flight)
        except Exception as e:
            log.error("_frame error: %s", e, exc_info=True)
        self._root.after(FRAME_INTERVAL_MS, self._frame)

    def tick(self, now):
        """Scheduler half of a frame; no Tk involved."""
        was_in_flight = self.scheduler.in_flight
        self.scheduler.maybe_trigger(now, self._credential)
        if self.scheduler.in_flight and not was_in_flight:
            self.state.on_fetch_started()

        outcome = self.scheduler.poll()
        if outcome is not None:
            self.state.apply_outcome(outcome)
            log.info("GitHub status=%s | items=%d", outcome.status.value, len(outcome.items))

    # ─── Input handlers ──────────────────────────────────────

    def refresh_now(self):
        """GitHub button: re-read the credential and fetch immediately."""
        if self.scheduler.in_flight:
            return
        self._credential = self._credential_source()
        self.scheduler.trigger_now(self._credential, now=time.time())
        if self.scheduler.in_flight:
            self.state.on_fetch_started()

    def _on_cycle_time_format(self):
        self.state.cycle_time_format()
        self._persist_formats()

    def _on_toggle_hour_format(self):
        self.state.toggle_hour_format()
        self._persist_formats()

    def _persist_formats(self):
        self._config["hourFormat"] = self.state.hour_format.value
        self._config["timeFormat"] = self.state.time_format.value
        try:
            save_config(self._config)
        except OSError as e:
            log.warning("Could not save display formats: %s", e)
