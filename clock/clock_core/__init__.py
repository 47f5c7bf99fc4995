"""
clock_core - commit-clock desktop widget
========================================
Architecture: Tkinter main-thread event loop + one detached fetch thread
per GitHub refresh. Zero busy-wait, the UI never blocks on the network.

  constants.py    -> Version, intervals, API limits, theme
  config.py       -> Paths, logging, config load/save, credential masking
  credentials.py  -> Token lookup (env, .env, token file)
  http_client.py  -> HTTP session with pooling + CA bundle, no retries
  models.py       -> PullRequestRef, FetchOutcome, ConnectionStatus, issue keys
  api.py          -> GitHub lookups (identity, search, repos, pulls)
  worker.py       -> Fetch cascade + detached thread launcher
  mailbox.py      -> Single-slot worker -> UI handoff
  state.py        -> SchedulerState, WidgetState
  scheduler.py    -> FetchScheduler (periodic/manual trigger, poll)
  clockface.py    -> Time/date text formats
  presenter.py    -> ClockView (Tk widgets for clock + PR list)
  app.py          -> ClockApp (Tk main loop, root.after frame loop)
  runner.py       -> main(), --once mode, auto-restart wrapper
"""
