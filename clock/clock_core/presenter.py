"""
ClockView - Tk widgets for the clock face and the GitHub panel.

Created and driven EXCLUSIVELY on the Tkinter main thread. render() is
called once per frame with the current WidgetState; the PR rows are only
rebuilt when the item tuple actually changes.
"""

import tkinter as tk
from dataclasses import dataclass, field

from .clockface import format_time, am_pm_suffix, format_day_month, format_year
from .config import log
from .constants import THEME, FONT_FAMILY
from .models import find_issue_key, status_color

_BUSY_FRAMES = ("·  ", "·· ", "···", " ··", "  ·", "   ")


@dataclass
class ViewContext:
    """Everything the view draws with. Passed in, never module-global."""
    theme: dict = field(default_factory=lambda: dict(THEME))
    font_family: str = FONT_FAMILY


class ClockView:
    """
    Layout (top to bottom):
      year / day-month      small muted labels
      time [+ AM/PM]        large digits
      GitHub button + busy  status-colored button, animated dots
      PR rows               [KEY] title, click opens the URL
    """

    def __init__(self, root, context, on_refresh, on_open_url):
        self._root = root
        self._ctx = context
        self._on_refresh = on_refresh
        self._on_open_url = on_open_url
        self._rendered_items = None
        self._busy_frame = 0
        self._build_ui()

    # ─── UI construction ─────────────────────────────────────

    def _build_ui(self):
        theme = self._ctx.theme
        family = self._ctx.font_family
        self._root.configure(bg=theme["bg"])

        frame = tk.Frame(self._root, bg=theme["bg"], padx=20, pady=16)
        frame.pack(fill="both", expand=True)

        date_row = tk.Frame(frame, bg=theme["bg"])
        date_row.pack(anchor="w")
        self._year_label = tk.Label(date_row, font=(family, 14, "bold"),
                                    fg=theme["text_muted"], bg=theme["bg"])
        self._year_label.pack(side="left", padx=(0, 12))
        self._date_label = tk.Label(date_row, font=(family, 14, "bold"),
                                    fg=theme["text_muted"], bg=theme["bg"])
        self._date_label.pack(side="left")

        time_row = tk.Frame(frame, bg=theme["bg"])
        time_row.pack(anchor="w")
        self._time_label = tk.Label(time_row, font=(family, 48, "bold"),
                                    fg=theme["active"], bg=theme["bg"])
        self._time_label.pack(side="left")
        self._ampm_label = tk.Label(time_row, font=(family, 16, "bold"),
                                    fg=theme["active"], bg=theme["bg"])
        self._ampm_label.pack(side="left", anchor="s", padx=(8, 0), pady=(0, 10))

        gh_row = tk.Frame(frame, bg=theme["bg"])
        gh_row.pack(anchor="w", pady=(10, 4))
        self._gh_button = tk.Button(
            gh_row, text="GitHub", font=(family, 11, "bold"),
            fg="white", bg=theme["unknown"],
            activebackground=theme["inactive"], activeforeground="white",
            relief="flat", padx=12, pady=4, cursor="hand2",
            command=self._on_refresh,
        )
        self._gh_button.pack(side="left")
        self._busy_label = tk.Label(gh_row, text="", font=(family, 14, "bold"),
                                    fg=theme["text_muted"], bg=theme["bg"], width=4)
        self._busy_label.pack(side="left", padx=(8, 0))

        self._pr_frame = tk.Frame(frame, bg=theme["bg"])
        self._pr_frame.pack(fill="x", anchor="w")

    # ─── Per-frame update ────────────────────────────────────

    def render(self, widget_state, now, busy):
        self._year_label.config(text=format_year(now))
        self._date_label.config(text=format_day_month(now))
        self._time_label.config(
            text=format_time(now, widget_state.hour_format, widget_state.time_format))
        self._ampm_label.config(text=am_pm_suffix(now, widget_state.hour_format) or "")

        self._gh_button.config(bg=status_color(widget_state.status, self._ctx.theme))

        if busy:
            self._busy_frame = (self._busy_frame + 1) % len(_BUSY_FRAMES)
            self._busy_label.config(text=_BUSY_FRAMES[self._busy_frame])
        else:
            self._busy_label.config(text="")

        if widget_state.items != self._rendered_items:
            self._render_items(widget_state.items)
            self._rendered_items = widget_state.items

    def _render_items(self, items):
        theme = self._ctx.theme
        family = self._ctx.font_family
        for child in self._pr_frame.winfo_children():
            child.destroy()

        for ref in items:
            row = tk.Frame(self._pr_frame, bg=theme["bg"], cursor="hand2")
            row.pack(fill="x", anchor="w", pady=1)

            key = find_issue_key(ref.title)
            if key:
                tk.Label(row, text=key, font=(family, 10, "bold"),
                         fg=theme["bg"], bg=theme["jira"], padx=4).pack(side="left", padx=(0, 6))

            title = tk.Label(row, text=ref.title, font=(family, 10),
                             fg=theme["text_primary"], bg=theme["bg"],
                             anchor="w", justify="left", wraplength=520)
            title.pack(side="left", fill="x")

            for widget in (row, title, *row.winfo_children()):
                widget.bind("<Button-1>", lambda _e, url=ref.url: self._open(url))

        log.info("PR list redrawn (%d items)", len(items))

    def _open(self, url):
        try:
            self._on_open_url(url)
        except Exception as e:
            log.error("Could not open %s: %s", url, e)
